"""Tests for AI fix response parsing."""

from __future__ import annotations

import json

import pytest
from assertpy import assert_that

from remedy.ai.parser import (
    DEFAULT_CONFIDENCE,
    assess_fix_complexity,
    clamp_confidence,
    parse_fix_response,
    strip_code_fence,
)
from remedy.enums.change_type import ChangeType
from remedy.enums.fix_complexity import FixComplexity
from remedy.models.change import Change


def _parse(raw, error):
    return parse_fix_response(raw, error, model="mock-model", provider="mock")


# -- Fence stripping --------------------------------------------------------


def test_strip_code_fence_plain_text_is_stripped():
    """Unfenced text is returned stripped."""
    assert_that(strip_code_fence('  {"a": 1}\n')).is_equal_to('{"a": 1}')


def test_strip_code_fence_json_fence():
    """A json fence is unwrapped up to the closing fence."""
    raw = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
    assert_that(strip_code_fence(raw)).is_equal_to('{"a": 1}')


def test_strip_code_fence_plain_fence():
    """Content between the first and second plain fences is used."""
    raw = '```\n{"a": 1}\n```'
    assert_that(strip_code_fence(raw)).is_equal_to('{"a": 1}')


# -- Confidence clamping ----------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (-5, 0.0),
        (1.5, 1.0),
        (0.42, 0.42),
        (1, 1.0),
        ("abc", DEFAULT_CONFIDENCE),
        ("0.9", DEFAULT_CONFIDENCE),
        (None, DEFAULT_CONFIDENCE),
        (True, DEFAULT_CONFIDENCE),
        (float("nan"), DEFAULT_CONFIDENCE),
    ],
)
def test_clamp_confidence(value, expected):
    """Confidence is clamped to [0, 1]; non-numbers fall back to 0.7."""
    assert_that(clamp_confidence(value)).is_equal_to(expected)


@pytest.mark.parametrize(
    ("confidence", "expected"),
    [(-5, 0.0), (1.5, 1.0), ("abc", 0.7)],
)
def test_parsed_confidence_is_clamped(sample_error, valid_payload, confidence, expected):
    """Out-of-range and non-numeric confidences are normalized on parse."""
    valid_payload["confidence"] = confidence
    outcome = _parse(json.dumps(valid_payload), sample_error)

    assert_that(outcome.success).is_true()
    assert_that(outcome.confidence).is_equal_to(expected)


def test_missing_confidence_defaults(sample_error, valid_payload):
    """An absent confidence defaults to 0.7."""
    del valid_payload["confidence"]
    outcome = _parse(json.dumps(valid_payload), sample_error)

    assert_that(outcome.confidence).is_equal_to(0.7)


# -- Complexity -------------------------------------------------------------


def test_complexity_single_insert_is_simple():
    """One insert scores 1."""
    changes = [Change(type=ChangeType.INSERT, line=1, text=";")]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.SIMPLE)


def test_complexity_no_changes_is_simple():
    """No changes scores 0."""
    assert_that(assess_fix_complexity([])).is_equal_to(FixComplexity.SIMPLE)


def test_complexity_two_replaces_is_complex():
    """Two replaces score 2 + 2 + 2 (count) = 6, which is complex."""
    changes = [Change(type=ChangeType.REPLACE, line=i) for i in (1, 2)]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.COMPLEX)


def test_complexity_multiline_replace_is_medium():
    """A replace with more than three new lines scores 2 + 2 = 4."""
    changes = [
        Change(type=ChangeType.REPLACE, line=1, new_code="a\nb\nc\nd"),
    ]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.MEDIUM)


def test_complexity_three_line_new_code_is_not_multiline():
    """Exactly three new lines adds nothing."""
    changes = [
        Change(type=ChangeType.REPLACE, line=1, new_code="a\nb\nc"),
    ]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.SIMPLE)


def test_complexity_modify_scores_zero():
    """Modify and cleanup changes carry no base weight."""
    changes = [Change(type=ChangeType.MODIFY, line=1)]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.SIMPLE)


def test_complexity_insert_and_delete_is_medium():
    """Insert + delete + count of two scores 4."""
    changes = [
        Change(type=ChangeType.INSERT, line=1),
        Change(type=ChangeType.DELETE, line=3),
    ]
    assert_that(assess_fix_complexity(changes)).is_equal_to(FixComplexity.MEDIUM)


# -- Full parse -------------------------------------------------------------


def test_parse_valid_payload(sample_error, valid_payload):
    """A well-formed payload produces a successful outcome with metadata."""
    outcome = parse_fix_response(
        json.dumps(valid_payload),
        sample_error,
        model="claude-sonnet-4-6",
        provider="anthropic",
        input_tokens=100,
        output_tokens=50,
        cost_estimate=0.01,
    )

    assert_that(outcome.success).is_true()
    assert_that(outcome.fix).is_equal_to("const label: string = 'x';")
    assert_that(outcome.confidence).is_equal_to(0.85)
    assert_that(outcome.changes).is_length(1)
    assert_that(outcome.changes[0].type).is_equal_to(ChangeType.REPLACE)
    assert_that(outcome.changes[0].old_code).is_equal_to("const label: number = 'x';")
    assert_that(outcome.warnings).contains("Callers expecting a number must be updated")
    assert_that(outcome.metadata).is_not_none()
    assert_that(outcome.metadata.ai_generated).is_true()
    assert_that(outcome.metadata.model).is_equal_to("claude-sonnet-4-6")
    assert_that(outcome.metadata.provider).is_equal_to("anthropic")
    assert_that(outcome.metadata.error_type).is_equal_to("type")
    assert_that(outcome.metadata.complexity).is_equal_to(FixComplexity.SIMPLE)
    assert_that(outcome.metadata.input_tokens).is_equal_to(100)
    assert_that(outcome.metadata.timestamp).is_not_empty()


def test_parse_fenced_payload(sample_error, valid_payload):
    """A payload wrapped in a json fence parses."""
    raw = f"```json\n{json.dumps(valid_payload)}\n```"
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_true()
    assert_that(outcome.explanation).starts_with("The value is a string")


def test_parse_not_json(sample_error):
    """Prose responses fail and keep the raw text."""
    raw = "Sorry, I cannot help with that."
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_false()
    assert_that(outcome.confidence).is_equal_to(0.0)
    assert_that(outcome.reason).starts_with("Failed to parse AI response:")
    assert_that(outcome.raw_response).is_equal_to(raw)


def test_parse_missing_required_fields(sample_error):
    """A payload without fix and explanation is rejected."""
    raw = json.dumps({"fix": "x"})
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_false()
    assert_that(outcome.reason).contains("missing required fields")
    assert_that(outcome.raw_response).is_equal_to(raw)


def test_parse_empty_fix_is_rejected(sample_error):
    """Empty strings do not satisfy the required fields."""
    raw = json.dumps({"fix": "", "explanation": "nothing"})
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_false()


@pytest.mark.parametrize(
    "payload",
    [
        {"fix": {"code": "x"}, "explanation": "object fix"},
        {"fix": ["x"], "explanation": "list fix"},
        {"fix": "x", "explanation": 42},
    ],
)
def test_parse_non_string_fields_are_rejected(sample_error, payload):
    """Fix and explanation must be strings, not stringified values."""
    raw = json.dumps(payload)
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_false()
    assert_that(outcome.fix).is_none()
    assert_that(outcome.reason).starts_with("Failed to parse AI response:")
    assert_that(outcome.reason).contains("must be strings")


def test_parse_non_object_payload(sample_error):
    """A JSON array is not a valid payload."""
    outcome = _parse("[1, 2, 3]", sample_error)

    assert_that(outcome.success).is_false()
    assert_that(outcome.reason).contains("expected a JSON object")


def test_parse_tolerates_bad_changes_and_warnings(sample_error):
    """Malformed changes and warnings are dropped rather than rejected."""
    raw = json.dumps(
        {
            "fix": "x",
            "explanation": "y",
            "changes": [{"type": "weird", "line": "7"}, "nope"],
            "warnings": "single warning",
        },
    )
    outcome = _parse(raw, sample_error)

    assert_that(outcome.success).is_true()
    assert_that(outcome.changes).is_length(1)
    assert_that(outcome.changes[0].type).is_equal_to(ChangeType.MODIFY)
    assert_that(outcome.changes[0].line).is_none()
    assert_that(outcome.warnings).is_equal_to(("single warning",))


def test_parse_without_changes(sample_error):
    """changes and warnings are optional."""
    outcome = _parse(json.dumps({"fix": "x", "explanation": "y"}), sample_error)

    assert_that(outcome.success).is_true()
    assert_that(outcome.changes).is_empty()
    assert_that(outcome.warnings).is_empty()
