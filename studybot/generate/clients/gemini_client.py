# Client for the Gemini generateContent endpoint.
# One attempt per call, explicit timeout, key passed as a query parameter.

import logging

import requests

from studybot.errors import TransportError, UpstreamError
from ..types import UpstreamRequestBody, UpstreamResponse

logger = logging.getLogger(__name__)


class GeminiClient:
    def __init__(self, api_key: str, model: str, base_url: str, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def generate(self, body: UpstreamRequestBody) -> UpstreamResponse:
        try:
            resp = requests.post(
                self.url,
                params={"key": self.api_key},
                json=body.to_json(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.exception("Request to Gemini model %s failed", self.model)
            raise TransportError(detail=f"{type(e).__name__}: {e}") from e

        if not resp.ok:
            logger.warning("Gemini API error %s: %s", resp.status_code, resp.text[:2000])
            raise UpstreamError(resp.status_code, detail=resp.text[:500])

        try:
            data = resp.json()
        except ValueError as e:
            logger.exception("Gemini returned a body that is not JSON")
            raise TransportError(detail=f"invalid JSON from upstream: {e}") from e

        return UpstreamResponse.from_json(data)
