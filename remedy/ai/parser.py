"""Parsing and validation of AI fix responses.

Model output is untrusted. It may be wrapped in markdown fences, may not
be JSON, may omit required fields or report confidence as a string. The
parser never raises: anything unusable becomes a failed outcome that
keeps the raw text for diagnosis.
"""

from __future__ import annotations

import json
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger

from remedy.ai.exceptions import AIResponseError
from remedy.enums.change_type import ChangeType
from remedy.enums.fix_complexity import FixComplexity
from remedy.models.change import Change
from remedy.models.outcomes import AIFixMetadata, AIFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError

DEFAULT_CONFIDENCE = 0.7
FENCE = "```"
JSON_FENCE = "```json"

# Complexity scoring
_CHANGE_WEIGHTS: dict[ChangeType, int] = {
    ChangeType.INSERT: 1,
    ChangeType.DELETE: 1,
    ChangeType.REPLACE: 2,
}
_MULTILINE_THRESHOLD = 3
_MULTILINE_WEIGHT = 2
_SIMPLE_MAX = 2
_MEDIUM_MAX = 5


def strip_code_fence(text: str) -> str:
    """Remove an optional markdown fence around a JSON payload.

    A ```` ```json ```` fence takes precedence; otherwise the content
    between the first and second plain fences is used.

    Args:
        text: Raw model output.

    Returns:
        str: The unwrapped, stripped payload text.
    """
    if JSON_FENCE in text:
        return text.split(JSON_FENCE, 1)[1].split(FENCE, 1)[0].strip()
    if FENCE in text:
        parts = text.split(FENCE)
        return parts[1].strip()
    return text.strip()


def clamp_confidence(value: Any, default: float = DEFAULT_CONFIDENCE) -> float:
    """Clamp a reported confidence into [0, 1].

    Args:
        value: Raw confidence from the payload.
        default: Used when the value is missing or not a real number.

    Returns:
        float: The clamped confidence.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    if math.isnan(value):
        return default
    return max(0.0, min(1.0, float(value)))


def assess_fix_complexity(changes: Sequence[Change]) -> FixComplexity:
    """Classify the structural size of a proposed fix.

    Inserts and deletes score 1, replaces score 2, any ``new_code`` over
    three lines adds 2, and with more than one change the change count is
    added again. Up to 2 is simple, up to 5 is medium, above is complex.

    Args:
        changes: Proposed changes.

    Returns:
        FixComplexity: Advisory complexity bucket.
    """
    score = 0
    for change in changes:
        score += _CHANGE_WEIGHTS.get(change.type, 0)
        if change.new_code and len(change.new_code.split("\n")) > _MULTILINE_THRESHOLD:
            score += _MULTILINE_WEIGHT
    if len(changes) > 1:
        score += len(changes)

    if score <= _SIMPLE_MAX:
        return FixComplexity.SIMPLE
    if score <= _MEDIUM_MAX:
        return FixComplexity.MEDIUM
    return FixComplexity.COMPLEX


def _load_payload(raw: str) -> dict[str, Any]:
    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise AIResponseError(str(e)) from e
    if not isinstance(data, dict):
        raise AIResponseError(
            f"Invalid response format: expected a JSON object, got {type(data).__name__}",
        )
    if not data.get("fix") or not data.get("explanation"):
        raise AIResponseError("Invalid response format: missing required fields")
    if not isinstance(data["fix"], str) or not isinstance(data["explanation"], str):
        raise AIResponseError(
            "Invalid response format: fix and explanation must be strings",
        )
    return data


def _parse_changes(value: Any) -> tuple[Change, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(Change.from_dict(item) for item in value if isinstance(item, dict))


def _parse_warnings(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item)


def parse_fix_response(
    raw: str,
    error: ClassifiedError,
    *,
    model: str,
    provider: str = "",
    input_tokens: int = 0,
    output_tokens: int = 0,
    cost_estimate: float = 0.0,
) -> AIFixOutcome:
    """Parse a raw model response into an AI fix outcome.

    Args:
        raw: Raw model output.
        error: The diagnostic being fixed.
        model: Model that produced the response.
        provider: Provider name.
        input_tokens: Input tokens consumed by the call.
        output_tokens: Output tokens generated by the call.
        cost_estimate: Estimated cost of the call.

    Returns:
        AIFixOutcome: Successful outcome with clamped confidence and
            complexity metadata, or a failed outcome carrying ``raw``.
    """
    try:
        data = _load_payload(raw)
    except AIResponseError as e:
        logger.debug(f"Failed to parse AI fix response for {error.location()}: {e}")
        return AIFixOutcome.failed(
            f"Failed to parse AI response: {e}",
            raw_response=raw,
        )

    changes = _parse_changes(data.get("changes"))
    return AIFixOutcome(
        success=True,
        fix=data["fix"],
        explanation=data["explanation"],
        confidence=clamp_confidence(data.get("confidence")),
        changes=changes,
        warnings=_parse_warnings(data.get("warnings")),
        metadata=AIFixMetadata(
            model=model,
            provider=provider,
            error_type=str(error.type),
            complexity=assess_fix_complexity(changes),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_estimate=cost_estimate,
        ),
    )
