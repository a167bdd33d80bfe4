"""Result types produced by fixers, the AI layer and the fix generator.

Three shapes exist:

- ``DeterministicFixOutcome``: what a template strategy returns.
- ``AIFixOutcome``: what the AI layer returns after parsing a response.
- ``FixResult``: the uniform result handed back to callers, built from
  exactly one of the two above.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from remedy.enums.fix_complexity import FixComplexity
from remedy.models.change import Change
from remedy.models.suggestion import FixSuggestion


@dataclass(frozen=True)
class DeterministicFixOutcome:
    """Outcome of a single deterministic fix attempt.

    Attributes:
        success: Whether the strategy produced a fix.
        fix: Entire new file content on success.
        description: Short description of the edit.
        changes: Edits relative to the original content.
        reason: Why the strategy declined, on failure.
        suggestion: Optional hint for the user when declining.
    """

    success: bool
    fix: str | None = field(default=None)
    description: str | None = field(default=None)
    changes: tuple[Change, ...] = field(default_factory=tuple)
    reason: str | None = field(default=None)
    suggestion: str | None = field(default=None)

    @classmethod
    def succeeded(
        cls,
        fix: str,
        description: str,
        changes: list[Change] | tuple[Change, ...],
    ) -> DeterministicFixOutcome:
        """Build a successful outcome."""
        return cls(
            success=True,
            fix=fix,
            description=description,
            changes=tuple(changes),
        )

    @classmethod
    def declined(
        cls,
        reason: str,
        *,
        suggestion: str | None = None,
        description: str | None = None,
    ) -> DeterministicFixOutcome:
        """Build a declined outcome carrying a human-readable reason."""
        return cls(
            success=False,
            reason=reason,
            suggestion=suggestion,
            description=description,
        )


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class AIFixMetadata:
    """Provenance of an AI-generated fix.

    Attributes:
        model: Model identifier that produced the response.
        error_type: Error type of the diagnostic being fixed.
        complexity: Advisory complexity of the proposed changes.
        timestamp: ISO-8601 UTC time the response was parsed.
        ai_generated: Always True; kept for downstream consumers.
        provider: Provider name (e.g. "anthropic").
        input_tokens: Tokens consumed for input.
        output_tokens: Tokens generated for output.
        cost_estimate: Estimated cost in USD.
    """

    model: str
    error_type: str
    complexity: FixComplexity
    timestamp: str = field(default_factory=_utc_timestamp)
    ai_generated: bool = field(default=True)
    provider: str = field(default="")
    input_tokens: int = field(default=0)
    output_tokens: int = field(default=0)
    cost_estimate: float = field(default=0.0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict with camelCase keys."""
        return {
            "aiGenerated": self.ai_generated,
            "model": self.model,
            "provider": self.provider,
            "timestamp": self.timestamp,
            "errorType": self.error_type,
            "complexity": str(self.complexity),
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
            "costEstimate": self.cost_estimate,
        }


@dataclass(frozen=True)
class AIFixOutcome:
    """Outcome of an AI fix attempt.

    On failure only ``reason`` (and ``raw_response`` for parse failures)
    are meaningful and ``confidence`` is 0.

    Attributes:
        success: Whether a valid fix was parsed.
        fix: Code proposed by the model.
        explanation: Why the fix works.
        confidence: Model confidence, clamped to [0, 1].
        changes: Edits proposed by the model.
        warnings: Side effects reported by the model.
        metadata: Provenance and complexity, on success.
        reason: Failure reason.
        raw_response: Unparseable model output, kept for diagnosis.
    """

    success: bool
    fix: str | None = field(default=None)
    explanation: str | None = field(default=None)
    confidence: float = field(default=0.0)
    changes: tuple[Change, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    metadata: AIFixMetadata | None = field(default=None)
    reason: str | None = field(default=None)
    raw_response: str | None = field(default=None)

    @classmethod
    def failed(
        cls,
        reason: str,
        *,
        raw_response: str | None = None,
    ) -> AIFixOutcome:
        """Build a failed outcome with zero confidence."""
        return cls(
            success=False,
            reason=reason,
            raw_response=raw_response,
            confidence=0.0,
        )


@dataclass(frozen=True)
class FixResult:
    """Uniform result returned by the fix generator.

    Attributes:
        success: Whether a fix is available.
        fix_type: Template name, ``"ai"``, or None on a classification
            miss with no AI fallback.
        method: ``"template"``, ``"ai"`` or None.
        fix: Full new file text (templates) or proposed code (AI).
        description: Short description (templates).
        explanation: Model explanation (AI).
        changes: Descriptive edits.
        warnings: Model-reported warnings (AI).
        confidence: Static template confidence, or clamped AI confidence.
        auto_fixable: Template flag; always False for AI results.
        reason: Failure reason.
        raw_response: Unparseable model output, if any.
        suggestion: Hint attached by a declining template.
        suggestions: Manual-review hints, on failure only.
        metadata: AI provenance.
    """

    success: bool
    fix_type: str | None = field(default=None)
    method: str | None = field(default=None)
    fix: str | None = field(default=None)
    description: str | None = field(default=None)
    explanation: str | None = field(default=None)
    changes: tuple[Change, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    confidence: float = field(default=0.0)
    auto_fixable: bool = field(default=False)
    reason: str | None = field(default=None)
    raw_response: str | None = field(default=None)
    suggestion: str | None = field(default=None)
    suggestions: tuple[FixSuggestion, ...] = field(default_factory=tuple)
    metadata: AIFixMetadata | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict, omitting unset optional fields.

        Returns:
            dict[str, Any]: Result fields using camelCase keys.
        """
        data: dict[str, Any] = {
            "success": self.success,
            "fixType": self.fix_type,
            "confidence": self.confidence,
        }
        if self.method is not None:
            data["method"] = self.method
        if self.method == "template":
            data["autoFixable"] = self.auto_fixable
        for key, value in (
            ("fix", self.fix),
            ("description", self.description),
            ("explanation", self.explanation),
            ("reason", self.reason),
            ("rawResponse", self.raw_response),
            ("suggestion", self.suggestion),
        ):
            if value is not None:
                data[key] = value
        if self.success or self.changes:
            data["changes"] = [change.to_dict() for change in self.changes]
        if self.warnings:
            data["warnings"] = list(self.warnings)
        if self.suggestions:
            data["suggestions"] = [s.to_dict() for s in self.suggestions]
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data
