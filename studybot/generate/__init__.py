# Prompt adapter: request building, Gemini clients and answer extraction.
# Everything the app and tests import comes through here.

from .generator import StudyGenerator, build_model_client
from .extract import extract_structured, extract_text
from .types import ArtifactKind, ChatTurn, Flashcard, QuizQuestion, UpstreamRequestBody, UpstreamResponse
from .clients.echo_dev_client import EchoDevClient
from .clients.gemini_client import GeminiClient

__all__ = [
    "StudyGenerator",
    "build_model_client",
    "extract_structured",
    "extract_text",
    "ArtifactKind",
    "ChatTurn",
    "Flashcard",
    "QuizQuestion",
    "UpstreamRequestBody",
    "UpstreamResponse",
    "EchoDevClient",
    "GeminiClient",
]
