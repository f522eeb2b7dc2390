# Offline stand-in for GeminiClient, for local dev and tests.
# Answers with a fixed reply, a fixed raw response, or an echo of the last user turn,
# and records every request body it receives.

from typing import Any, Dict, List, Optional

from ..types import UpstreamRequestBody, UpstreamResponse


class EchoDevClient:
    def __init__(self, reply: Optional[str] = None, payload: Optional[Dict[str, Any]] = None):
        self.model = "echo-dev"
        self.reply = reply
        self.payload = payload
        self.requests: List[UpstreamRequestBody] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def generate(self, body: UpstreamRequestBody) -> UpstreamResponse:
        self.requests.append(body)
        if self.payload is not None:
            return UpstreamResponse.from_json(self.payload)

        text = self.reply
        if text is None:
            user_texts = [t.parts[0].text for t in body.contents if t.role == "user" and t.parts]
            text = f"[ECHO RESPONSE]\n{user_texts[-1] if user_texts else '(no user input)'}"
        return UpstreamResponse.model_validate(
            {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}
        )
