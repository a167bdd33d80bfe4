"""Tests for the fix generator."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest
from assertpy import assert_that

from remedy.ai.config import AIConfig
from remedy.ai.exceptions import AIProviderError
from remedy.ai.fix import AIFixGenerator
from remedy.enums.error_type import ErrorType
from remedy.fixes.generator import FixGenerator, FixRequest
from remedy.fixes.stats import FixStats
from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.registry import TemplateRegistry
from remedy.models.context import FixContext, RelatedFile
from remedy.models.outcomes import AIFixOutcome
from tests.unit.ai.conftest import MockAIProvider, make_response
from tests.unit.fixes.conftest import make_error

AI_PAYLOAD = {
    "fix": "const label: string = 'x';",
    "explanation": "The value is a string.",
    "confidence": 0.8,
    "changes": [{"type": "replace", "line": 1}],
    "warnings": [],
}


class ExplodingStrategy(FixStrategy):
    """Strategy that raises to simulate a programming error."""

    def attempt(self, error, content, context=None):
        """Raise unconditionally."""
        raise RuntimeError("boom")


class RecordingAIGenerator:
    """AI generator stand-in that records concurrency."""

    def __init__(self, max_parallel_calls: int = 5) -> None:
        """Initialize counters."""
        self.config = AIConfig(max_parallel_calls=max_parallel_calls)
        self.active = 0
        self.peak = 0
        self.seen: list[str] = []

    async def generate_fix(self, error, context):
        """Sleep briefly and return a successful outcome."""
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        self.seen.append(error.message)
        return AIFixOutcome(success=True, fix=error.message, explanation="ok", confidence=0.6)


def _ai_generator(*responses):
    provider = MockAIProvider(list(responses))
    return provider, AIFixGenerator(provider, AIConfig(retry_base_delay=0.0))


# -- Template path ----------------------------------------------------------


def test_template_success_returns_template_result():
    """A successful template returns its static confidence and flag."""
    generator = FixGenerator()
    error = make_error("syntax", "Missing semicolon.", line=1)

    result = asyncio.run(generator.generate_fix(error, "const x = 5"))

    assert_that(result.success).is_true()
    assert_that(result.method).is_equal_to("template")
    assert_that(result.fix_type).is_equal_to("missing_semicolon")
    assert_that(result.fix).is_equal_to("const x = 5;")
    assert_that(result.confidence).is_equal_to(0.9)
    assert_that(result.auto_fixable).is_true()
    assert_that(result.suggestions).is_empty()
    assert_that(generator.get_stats()).contains_entry(
        {"totalFixes": 1},
        {"successfulFixes": 1},
        {"failedFixes": 0},
        {"autoFixableErrors": 1},
        {"successRate": 100.0},
        {"templateFixes": 1},
        {"aiFixes": 0},
    )


def test_template_success_does_not_call_ai():
    """The AI path is skipped when a template fixes the error."""
    provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)

    result = asyncio.run(
        generator.generate_fix(make_error("style", "Trailing spaces"), "a  \n"),
    )

    assert_that(result.method).is_equal_to("template")
    assert_that(provider.calls).is_empty()


def test_template_decline_without_ai():
    """A declining template returns its reason and static confidence."""
    generator = FixGenerator()
    error = make_error("syntax", "Unexpected token ')'")

    result = asyncio.run(generator.generate_fix(error, "f(a, );"))

    assert_that(result.success).is_false()
    assert_that(result.fix_type).is_equal_to("unexpected_token")
    assert_that(result.reason).is_equal_to(
        "Unexpected token errors usually require manual review",
    )
    assert_that(result.confidence).is_equal_to(0.7)
    stats = generator.get_stats()
    assert_that(stats["failedFixes"]).is_equal_to(1)
    assert_that(stats["autoFixableErrors"]).is_equal_to(0)


def test_template_decline_keeps_suggestion():
    """Suggestions from declining templates reach the caller."""
    generator = FixGenerator()
    error = make_error("type", "Cannot find name 'useState'.", line=2)

    result = generator.generate_template_fix(error, "import a from 'a';\nuseState();\n")

    assert_that(result.success).is_false()
    assert_that(result.suggestion).contains("useState")


def test_no_bucket_for_error_type():
    """Unknown types report that no templates exist."""
    generator = FixGenerator()

    result = asyncio.run(
        generator.generate_fix(make_error("performance", "slow loop"), "x"),
    )

    assert_that(result.success).is_false()
    assert_that(result.fix_type).is_none()
    assert_that(result.reason).is_equal_to(
        "No fix templates available for error type: performance",
    )


def test_no_matching_template():
    """Messages that match no template in the bucket are reported."""
    generator = FixGenerator()

    result = generator.generate_template_fix(make_error("syntax", "weird thing"), "x")

    assert_that(result.success).is_false()
    assert_that(result.reason).is_equal_to(
        "No matching fix template found for error message: weird thing",
    )
    assert_that(generator.get_stats()["totalFixes"]).is_equal_to(1)


def test_strategy_exception_becomes_failed_result():
    """Exceptions inside a strategy never escape the generator."""
    registry = TemplateRegistry()
    registry.add(
        ErrorType.SYNTAX,
        "explodes",
        r"boom",
        ExplodingStrategy(),
        confidence=0.5,
        auto_fixable=True,
    )
    generator = FixGenerator(registry=registry.freeze())

    result = asyncio.run(generator.generate_fix(make_error("syntax", "boom"), "x"))

    assert_that(result.success).is_false()
    assert_that(result.reason).is_equal_to("Fix generation error: boom")
    assert_that(result.fix_type).is_equal_to("explodes")
    assert_that(generator.get_stats()["autoFixableErrors"]).is_equal_to(1)


# -- AI fallback ------------------------------------------------------------


def test_ai_fallback_after_template_decline():
    """A declined template falls through to the AI generator."""
    provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)
    error = make_error("type", "Type 'string' is not assignable to type 'number'.")

    result = asyncio.run(generator.generate_fix(error, "const label: number = 'x';"))

    assert_that(result.success).is_true()
    assert_that(result.method).is_equal_to("ai")
    assert_that(result.fix_type).is_equal_to("ai")
    assert_that(result.fix).is_equal_to("const label: string = 'x';")
    assert_that(result.confidence).is_equal_to(0.8)
    assert_that(result.auto_fixable).is_false()
    assert_that(result.metadata.ai_generated).is_true()
    assert_that(provider.calls).is_length(1)
    assert_that(provider.calls[0]["prompt"]).contains("const label: number = 'x';")
    assert_that(generator.get_stats()["successfulFixes"]).is_equal_to(1)


def test_ai_fallback_on_classification_miss():
    """Errors with no template go straight to AI."""
    provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)

    result = asyncio.run(
        generator.generate_fix(make_error("performance", "slow"), "x"),
    )

    assert_that(result.method).is_equal_to("ai")
    assert_that(result.success).is_true()


def test_ai_fallback_uses_given_context():
    """A provided context bundle reaches the prompt."""
    provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)
    context = FixContext(file_path="src/app.ts", file_content="x", framework="nestjs")

    asyncio.run(generator.generate_fix(make_error("scope", "'x' is not defined"), "x", context))

    assert_that(provider.calls[0]["prompt"]).contains("- Framework: nestjs")


def test_ai_parse_failure_is_returned():
    """Unparseable AI output yields the AI failure, not the template one."""
    _provider, ai = _ai_generator(make_response("no json here"))
    generator = FixGenerator(ai_generator=ai)

    result = asyncio.run(
        generator.generate_fix(make_error("syntax", "Unexpected token"), "x"),
    )

    assert_that(result.success).is_false()
    assert_that(result.method).is_equal_to("ai")
    assert_that(result.raw_response).is_equal_to("no json here")
    assert_that(generator.get_stats()["failedFixes"]).is_equal_to(1)


@patch("remedy.ai.retry._sleep", new_callable=AsyncMock)
def test_ai_failure_after_retries(mock_sleep):
    """Exhausted retries produce a failed AI result with zero confidence."""
    provider = MockAIProvider([AIProviderError("down")] * 4)
    generator = FixGenerator(ai_generator=AIFixGenerator(provider, AIConfig()))

    result = asyncio.run(
        generator.generate_fix(make_error("syntax", "Unexpected token"), "x"),
    )

    assert_that(result.success).is_false()
    assert_that(result.confidence).is_equal_to(0.0)
    assert_that(result.reason).is_equal_to("AI fix generation failed: down")
    assert_that(provider.calls).is_length(4)


def test_template_fix_never_uses_ai():
    """generate_template_fix is deterministic only."""
    provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)

    result = generator.generate_template_fix(make_error("syntax", "Unexpected token"), "x")

    assert_that(result.success).is_false()
    assert_that(result.method).is_equal_to("template")
    assert_that(provider.calls).is_empty()


# -- Batches ----------------------------------------------------------------


def test_generate_fixes_preserves_order_and_bounds_concurrency():
    """Results come back in input order with at most N in flight."""
    ai = RecordingAIGenerator()
    generator = FixGenerator(ai_generator=ai)
    requests = [
        FixRequest(make_error("performance", f"issue {i}"), "x") for i in range(6)
    ]

    results = asyncio.run(generator.generate_fixes(requests, max_concurrency=2))

    assert_that([r.fix for r in results]).is_equal_to([f"issue {i}" for i in range(6)])
    assert_that(ai.peak).is_less_than_or_equal_to(2)
    assert_that(ai.peak).is_greater_than(1)
    assert_that(generator.get_stats()["totalFixes"]).is_equal_to(6)


@pytest.mark.parametrize("limit", [1, 3])
def test_generate_fixes_defaults_to_configured_parallel_calls(limit):
    """Without an explicit bound, max_parallel_calls limits the batch."""
    ai = RecordingAIGenerator(max_parallel_calls=limit)
    generator = FixGenerator(ai_generator=ai)
    requests = [
        FixRequest(make_error("performance", f"issue {i}"), "x") for i in range(6)
    ]

    results = asyncio.run(generator.generate_fixes(requests))

    assert_that(results).is_length(6)
    assert_that(ai.peak).is_equal_to(limit)


def test_generate_fixes_explicit_bound_overrides_config():
    """An explicit max_concurrency wins over the AI config."""
    ai = RecordingAIGenerator(max_parallel_calls=1)
    generator = FixGenerator(ai_generator=ai)
    requests = [
        FixRequest(make_error("performance", f"issue {i}"), "x") for i in range(4)
    ]

    asyncio.run(generator.generate_fixes(requests, max_concurrency=4))

    assert_that(ai.peak).is_equal_to(4)


def test_generate_fixes_mixes_paths():
    """Template and AI results can share a batch."""
    generator = FixGenerator(ai_generator=RecordingAIGenerator())
    requests = [
        FixRequest(make_error("syntax", "missing semicolon"), "a = 1"),
        FixRequest(make_error("scope", "'y' is not defined"), "y"),
    ]

    results = asyncio.run(generator.generate_fixes(requests))

    assert_that([r.method for r in results]).is_equal_to(["template", "ai"])


def test_generate_fixes_empty_and_invalid():
    """Empty batches return nothing; concurrency must be positive."""
    generator = FixGenerator()

    assert_that(asyncio.run(generator.generate_fixes([]))).is_empty()
    with pytest.raises(ValueError, match="max_concurrency"):
        asyncio.run(generator.generate_fixes([], max_concurrency=0))


# -- Stats and catalog --------------------------------------------------------


def test_stats_success_rate_and_reset():
    """Counters accumulate across calls and reset to zero."""
    generator = FixGenerator()
    generator.generate_template_fix(make_error("syntax", "missing semicolon"), "a = 1")
    generator.generate_template_fix(make_error("syntax", "missing semicolon"), "a = 1;")
    generator.generate_template_fix(make_error("style", "trailing"), "b  ")

    stats = generator.get_stats()
    assert_that(stats["totalFixes"]).is_equal_to(3)
    assert_that(stats["successfulFixes"]).is_equal_to(2)
    assert_that(stats["failedFixes"]).is_equal_to(1)
    assert_that(stats["autoFixableErrors"]).is_equal_to(3)
    assert_that(stats["successRate"]).is_equal_to(66.7)

    generator.reset_stats()
    assert_that(generator.get_stats()["totalFixes"]).is_equal_to(0)
    assert_that(generator.get_stats()["successRate"]).is_equal_to(0.0)


def test_stats_are_per_generator():
    """Two generators never share counters unless given the same store."""
    shared = FixStats()
    first = FixGenerator(stats=shared)
    second = FixGenerator(stats=shared)
    third = FixGenerator()

    first.generate_template_fix(make_error("syntax", "missing semicolon"), "a")
    second.generate_template_fix(make_error("syntax", "missing semicolon"), "b")

    assert_that(shared.snapshot().total_fixes).is_equal_to(2)
    assert_that(third.get_stats()["totalFixes"]).is_equal_to(0)


def test_catalog_queries_delegate_to_registry():
    """available_fix_types and is_auto_fixable read the registry."""
    generator = FixGenerator()

    assert_that(generator.available_fix_types()).contains("style.trailing_spaces")
    assert_that(generator.is_auto_fixable(make_error("style", "trailing"))).is_true()
    assert_that(generator.is_auto_fixable(make_error("scope", "is not defined"))).is_false()


def test_result_serializes_to_camel_case():
    """FixResult.to_dict uses the public key names."""
    generator = FixGenerator()
    result = generator.generate_template_fix(
        make_error("syntax", "missing semicolon"),
        "a = 1",
    )

    data = json.loads(json.dumps(result.to_dict()))

    assert_that(data).contains_entry({"fixType": "missing_semicolon"})
    assert_that(data).contains_entry({"autoFixable": True})
    assert_that(data["changes"][0]).contains_entry({"type": "insert"})


def test_stats_break_down_by_method_type_and_complexity():
    """Per-method, per-type and per-complexity counts and mean confidence."""
    _provider, ai = _ai_generator(make_response(AI_PAYLOAD))
    generator = FixGenerator(ai_generator=ai)

    asyncio.run(generator.generate_fix(make_error("syntax", "missing semicolon"), "a"))
    asyncio.run(
        generator.generate_fix(make_error("type", "Type 'a' is not assignable"), "x"),
    )

    stats = generator.get_stats()
    assert_that(stats["templateFixes"]).is_equal_to(1)
    assert_that(stats["aiFixes"]).is_equal_to(1)
    assert_that(stats["byErrorType"]).is_equal_to({"syntax": 1, "type": 1})
    assert_that(stats["byComplexity"]).is_equal_to({"unknown": 1, "simple": 1})
    assert_that(stats["averageConfidence"]).is_equal_to(0.85)
    assert_that(stats["lastFixTime"]).is_not_none()

    generator.reset_stats()
    assert_that(generator.get_stats()["byErrorType"]).is_empty()
    assert_that(generator.get_stats()["lastFixTime"]).is_none()


# -- Suggestions ------------------------------------------------------------


def test_failed_result_carries_ordered_suggestions():
    """Error-type and context hints are attached, most useful first."""
    generator = FixGenerator()
    context = FixContext(
        file_path="src/app.ts",
        related_files=(RelatedFile(path="src/a.ts"), RelatedFile(path="src/b.ts")),
        framework="react",
    )

    result = generator.generate_template_fix(
        make_error("syntax", "Unexpected token"),
        "x",
        context,
    )

    assert_that([s.action for s in result.suggestions]).is_equal_to(
        ["syntax_check", "check_related", "framework_docs"],
    )
    assert_that(result.suggestions[1].description).is_equal_to(
        "Review related files: src/a.ts, src/b.ts",
    )
    assert_that(result.suggestions[2].description).is_equal_to(
        "Check react documentation and patterns",
    )
    assert_that(result.to_dict()["suggestions"][0]).contains_entry(
        {"type": "manual"},
        {"confidence": 0.7},
    )


def test_failed_ai_result_carries_suggestions():
    """AI failures get the same manual-review hints."""
    _provider, ai = _ai_generator(make_response("not json"))
    generator = FixGenerator(ai_generator=ai)

    result = asyncio.run(
        generator.generate_fix(make_error("import", "missing import"), "x"),
    )

    assert_that(result.method).is_equal_to("ai")
    assert_that([s.action for s in result.suggestions]).is_equal_to(["import_review"])


def test_unknown_type_without_context_has_no_suggestions():
    """No hint applies to unknown types without context."""
    result = FixGenerator().generate_template_fix(make_error("performance", "slow"), "x")

    assert_that(result.suggestions).is_empty()
    assert_that(result.to_dict()).does_not_contain_key("suggestions")
