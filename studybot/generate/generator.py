# StudyGenerator: one entry point per endpoint.
# Each call checks configuration, builds the Gemini request body, makes exactly
# one upstream call and extracts the answer.

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from studybot.errors import ConfigurationError
from studybot.settings import Settings

from . import normalize, presets
from .clients.echo_dev_client import EchoDevClient
from .clients.gemini_client import GeminiClient
from .extract import extract_structured, extract_text
from .types import ArtifactKind, ChatTurn, Flashcard, QuizQuestion, UpstreamRequestBody, UpstreamResponse

logger = logging.getLogger(__name__)


def build_model_client(settings: Settings):
    if settings.AI_CLIENT == "echo":
        return EchoDevClient()
    if settings.AI_CLIENT == "gemini":
        return GeminiClient(
            api_key=settings.GEMINI_API_KEY or "",
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT,
        )
    raise ValueError(f"Unknown AI_CLIENT: {settings.AI_CLIENT!r} (expected 'gemini' or 'echo')")


class StudyGenerator:
    def __init__(self, settings: Settings, model_client=None):
        self.settings = settings
        self.model_client = model_client if model_client is not None else build_model_client(settings)
        self.presets = presets.load_presets(settings.GENERATION_CONFIG_PATH)

    def _ensure_configured(self) -> None:
        if self.settings.AI_CLIENT == "gemini" and not self.settings.api_key_configured:
            logger.error("GEMINI_API_KEY is not set; refusing to call upstream")
            raise ConfigurationError(detail="GEMINI_API_KEY is not set")

    def _call(self, body: UpstreamRequestBody, endpoint: str) -> UpstreamResponse:
        logger.debug("Calling %s for %s with %d turn(s)", self.model_client.model, endpoint, len(body.contents))
        return self.model_client.generate(body)

    # ------------------------------------------------------------
    # Text endpoints
    # ------------------------------------------------------------
    def ask(self, prompt: Optional[str]) -> str:
        self._ensure_configured()
        body = normalize.normalize_simple(prompt, self.presets[presets.SIMPLE])
        return extract_text(self._call(body, presets.SIMPLE))

    def chat(self, message: Optional[str], topic: Optional[str], history: Optional[Sequence[ChatTurn]]) -> str:
        self._ensure_configured()
        body = normalize.normalize_chat(message, topic, history, self.presets[presets.CHAT])
        return extract_text(self._call(body, presets.CHAT))

    def styled(
        self,
        message: Optional[str],
        topic: Optional[str],
        mode: Optional[str],
        mood: Optional[str],
        personas: Optional[Iterable[str]],
    ) -> str:
        self._ensure_configured()
        body = normalize.normalize_styled(message, topic, mode, mood, personas, self.presets[presets.STYLED])
        return extract_text(self._call(body, presets.STYLED))

    # ------------------------------------------------------------
    # Structured endpoints
    # ------------------------------------------------------------
    def flashcards(self, topic: Optional[str], history: Optional[Sequence[ChatTurn]]) -> List[Flashcard]:
        self._ensure_configured()
        body = normalize.normalize_flashcards(topic, history, self.presets[presets.FLASHCARDS])
        return extract_structured(self._call(body, presets.FLASHCARDS), ArtifactKind.FLASHCARDS)

    def quiz(self, topic: Optional[str], history: Optional[Sequence[ChatTurn]]) -> List[QuizQuestion]:
        self._ensure_configured()
        body = normalize.normalize_quiz(topic, history, self.presets[presets.QUIZ])
        return extract_structured(self._call(body, presets.QUIZ), ArtifactKind.QUIZ)
