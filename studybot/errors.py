"""Error kinds surfaced by the prompt adapter.

Every failure a request can hit is one of the classes below. Each carries the
HTTP status to answer with, an operator-facing ``error`` label, a ``text`` that
is safe to show end users, and an optional ``detail`` that is only echoed back
outside production.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StudyBotError(Exception):
    status_code: int = 500
    error: str = "Internal server error"
    text: str = "Sorry, something went wrong. Please try again."

    def __init__(
        self,
        error: Optional[str] = None,
        *,
        text: Optional[str] = None,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        if error is not None:
            self.error = error
        if text is not None:
            self.text = text
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        super().__init__(self.error)

    def to_payload(self, include_detail: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error, "text": self.text}
        if include_detail and self.detail:
            payload["detail"] = self.detail
        return payload


class ClientValidationError(StudyBotError):
    """Missing or malformed field in the inbound request body."""

    status_code = 400
    error = "Invalid request"
    text = "Your request is missing required information."

    def __init__(self, error: str, **kwargs):
        kwargs.setdefault("text", error)
        super().__init__(error, **kwargs)


class ConfigurationError(StudyBotError):
    status_code = 500
    error = "Server configuration error"
    text = "The AI service is not configured. Please contact the administrator."


class UpstreamError(StudyBotError):
    """Gemini answered with a non-2xx status; the status is relayed as-is."""

    text = "Sorry, I'm having trouble reaching the AI right now. Please try again."

    def __init__(self, status_code: int, *, detail: Optional[str] = None):
        super().__init__(f"Gemini API error: {status_code}", detail=detail, status_code=status_code)


class UpstreamMalformedOutput(StudyBotError):
    status_code = 500
    error = "AI generated malformed output"
    text = "The AI returned content in an unexpected format. Please try again."


class TransportError(StudyBotError):
    status_code = 500
    error = "Error contacting AI"
    text = "Error contacting AI"
