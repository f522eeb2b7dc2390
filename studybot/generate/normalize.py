# Turn inbound request fields into a Gemini request body.
# Each builder validates its primary text field, then assembles contents with
# the current user turn last.

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from studybot.errors import ClientValidationError

from . import prompts
from .types import ChatTurn, GenerationConfig, UpstreamContentPart, UpstreamRequestBody, UpstreamTurn

USER_ROLE = "user"
MODEL_ROLE = "model"


def require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ClientValidationError(f"'{field}' is required and must be a non-empty string")
    return value


def role_for_sender(sender: str) -> str:
    return USER_ROLE if sender == "user" else MODEL_ROLE


def history_to_turns(history: Iterable[ChatTurn]) -> List[UpstreamTurn]:
    return [
        UpstreamTurn(role=role_for_sender(turn.sender), parts=[UpstreamContentPart(text=turn.content)])
        for turn in history
    ]


def _user_turn(text: str) -> UpstreamTurn:
    return UpstreamTurn(role=USER_ROLE, parts=[UpstreamContentPart(text=text)])


def _body(contents: List[UpstreamTurn], config: GenerationConfig) -> UpstreamRequestBody:
    return UpstreamRequestBody(contents=contents, generation_config=config)


def normalize_simple(prompt: Optional[str], config: GenerationConfig) -> UpstreamRequestBody:
    prompt = require_text(prompt, "prompt")
    return _body([_user_turn(prompt)], config)


def normalize_chat(
    message: Optional[str],
    topic: Optional[str],
    history: Optional[Sequence[ChatTurn]],
    config: GenerationConfig,
) -> UpstreamRequestBody:
    message = require_text(message, "message")
    contents = history_to_turns(history or [])
    contents.append(_user_turn(prompts.build_tutor_prompt(message, topic)))
    return _body(contents, config)


def normalize_styled(
    message: Optional[str],
    topic: Optional[str],
    mode: Optional[str],
    mood: Optional[str],
    personas: Optional[Iterable[str]],
    config: GenerationConfig,
) -> UpstreamRequestBody:
    message = require_text(message, "message")
    text = prompts.build_styled_prompt(message, topic, mode, mood, personas or [])
    return _body([_user_turn(text)], config)


def normalize_flashcards(
    topic: Optional[str],
    history: Optional[Sequence[ChatTurn]],
    config: GenerationConfig,
) -> UpstreamRequestBody:
    topic = require_text(topic, "topic")
    return _body([_user_turn(prompts.build_flashcards_prompt(topic, history or []))], config)


def normalize_quiz(
    topic: Optional[str],
    history: Optional[Sequence[ChatTurn]],
    config: GenerationConfig,
) -> UpstreamRequestBody:
    topic = require_text(topic, "topic")
    return _body([_user_turn(prompts.build_quiz_prompt(topic, history or []))], config)
