# Typed models shared across the generate package.
# Upstream models mirror the Gemini generateContent JSON; every nested field is
# optional on the response side so any shape Gemini returns still parses.

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class ChatTurn(BaseModel):
    """One turn of conversation history, oldest first."""
    sender: str
    content: str = ""


# ------------------------------------------------------------
# Upstream request
# ------------------------------------------------------------
class UpstreamContentPart(BaseModel):
    text: str


class UpstreamTurn(BaseModel):
    role: str  # "user" | "model"
    parts: List[UpstreamContentPart]


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    top_k: int = Field(alias="topK")
    top_p: float = Field(alias="topP")
    max_output_tokens: int = Field(alias="maxOutputTokens")


class UpstreamRequestBody(BaseModel):
    contents: List[UpstreamTurn]
    generation_config: GenerationConfig = Field(alias="generationConfig")

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


# ------------------------------------------------------------
# Upstream response
# ------------------------------------------------------------
class ResponseShape(str, Enum):
    NO_CANDIDATES = "no_candidates"
    NO_CONTENT = "no_content"
    EMPTY_PARTS = "empty_parts"
    TEXT = "text"


class ResponsePart(BaseModel):
    model_config = ConfigDict(extra="ignore")
    text: Optional[str] = None


class CandidateContent(BaseModel):
    model_config = ConfigDict(extra="ignore")
    parts: List[ResponsePart] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content: Optional[CandidateContent] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class UpstreamResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    candidates: List[Candidate] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "UpstreamResponse":
        """Parse a decoded body; a body that does not fit becomes an empty response."""
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError:
            return cls()

    @property
    def first_candidate(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    def shape(self) -> ResponseShape:
        cand = self.first_candidate
        if cand is None:
            return ResponseShape.NO_CANDIDATES
        if cand.content is None:
            return ResponseShape.NO_CONTENT
        if not cand.content.parts:
            return ResponseShape.EMPTY_PARTS
        return ResponseShape.TEXT

    def first_text(self) -> Optional[str]:
        """Text of the first part of the first candidate, if any."""
        if self.shape() is not ResponseShape.TEXT:
            return None
        return self.candidates[0].content.parts[0].text


# ------------------------------------------------------------
# Structured artifacts
# ------------------------------------------------------------
class Flashcard(BaseModel):
    question: str
    answer: str


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: List[str] = Field(min_length=2)
    correct_answer: int = Field(alias="correctAnswer", ge=0)

    @model_validator(mode="after")
    def _answer_in_range(self) -> "QuizQuestion":
        if self.correct_answer >= len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self


class ArtifactKind(str, Enum):
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"

    @property
    def record_model(self):
        return Flashcard if self is ArtifactKind.FLASHCARDS else QuizQuestion

    @property
    def envelope_key(self) -> str:
        return "flashcards" if self is ArtifactKind.FLASHCARDS else "quizQuestions"
