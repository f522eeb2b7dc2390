"""Pull answers out of a Gemini response.

``extract_text`` never raises: every response shape maps to a string.
``extract_structured`` is strict: anything that does not parse and validate as
the requested record list is reported as malformed output.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from studybot.errors import UpstreamMalformedOutput

from .types import ArtifactKind, ResponseShape, UpstreamResponse

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "Empty response from AI"
NO_RESPONSE = "No response from AI"
BLOCKED_PREFIX = "AI response blocked: "

_JSON_FENCE = re.compile(r"```json\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)


def _coerce(response: Union[UpstreamResponse, dict, None]) -> UpstreamResponse:
    if isinstance(response, UpstreamResponse):
        return response
    return UpstreamResponse.from_json(response)


def extract_text(response: Union[UpstreamResponse, dict, None]) -> str:
    resp = _coerce(response)
    shape = resp.shape()

    if shape is ResponseShape.TEXT:
        return resp.first_text() or EMPTY_RESPONSE
    if shape in (ResponseShape.NO_CONTENT, ResponseShape.EMPTY_PARTS):
        reason = resp.first_candidate.finish_reason
        if reason:
            return f"{BLOCKED_PREFIX}{reason}"
        return NO_RESPONSE
    # NO_CANDIDATES
    return NO_RESPONSE


def _parse_json(raw: str) -> Any:
    match = _JSON_FENCE.search(raw)
    candidate = match.group(1) if match else raw.strip()
    return json.loads(candidate)


def extract_structured(response: Union[UpstreamResponse, dict, None], kind: ArtifactKind) -> List[BaseModel]:
    resp = _coerce(response)
    raw = resp.first_text()
    if not raw:
        raise UpstreamMalformedOutput(detail=f"no text to parse ({extract_text(resp)})")

    try:
        data = _parse_json(raw)
    except json.JSONDecodeError as e:
        logger.warning("Could not parse %s output as JSON: %s | raw=%r", kind.value, e, raw[:200])
        raise UpstreamMalformedOutput(detail=str(e)) from e

    if isinstance(data, dict) and kind.envelope_key in data:
        data = data[kind.envelope_key]

    try:
        return TypeAdapter(List[kind.record_model]).validate_python(data)
    except ValidationError as e:
        logger.warning("%s output failed schema validation: %s", kind.value, e.errors()[:3])
        raise UpstreamMalformedOutput(detail=f"schema validation failed: {e.error_count()} error(s)") from e
