"""Fix orchestration: template first, AI fallback second.

For each request the generator classifies the error against the template
registry and runs the selected strategy. When no template applies, or the
template declines, the request falls through to the AI generator if one
is configured. Exactly one path's result is returned; results are never
merged.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from loguru import logger

from remedy.fixes.stats import METHOD_AI, METHOD_TEMPLATE, FixStats
from remedy.fixes.suggestions import build_suggestions
from remedy.fixes.templates.registry import TemplateRegistry, build_default_registry
from remedy.models.context import FixContext
from remedy.models.outcomes import FixResult

if TYPE_CHECKING:
    from remedy.ai.fix import AIFixGenerator
    from remedy.fixes.templates.base import FixTemplate
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.outcomes import AIFixOutcome, DeterministicFixOutcome

DEFAULT_MAX_CONCURRENCY = 5


@dataclass(frozen=True)
class FixRequest:
    """One independent fix request for batch generation.

    Attributes:
        error: The classified diagnostic.
        content: Current content of the file the error points at.
        context: Optional context bundle for the AI path.
    """

    error: ClassifiedError
    content: str
    context: FixContext | None = field(default=None)


class FixGenerator:
    """Generate fixes for classified errors.

    The template registry is read-only and shared. The only mutable state
    is the statistics counters, which are updated exactly once per request.
    """

    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        ai_generator: AIFixGenerator | None = None,
        stats: FixStats | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            registry: Template registry. Defaults to the built-in catalog.
            ai_generator: Optional AI fallback. Without it only templates
                are used.
            stats: Counter store. A fresh one is created when omitted.
        """
        self.registry = registry if registry is not None else build_default_registry()
        self.ai_generator = ai_generator
        self.stats = stats if stats is not None else FixStats()

    def _run_template(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None,
    ) -> tuple[FixTemplate | None, FixResult]:
        """Classify ``error`` and run the selected strategy.

        Returns the selected template (None on a classification miss) and
        the deterministic result. Does not touch the counters.
        """
        template = self.registry.classify(error)
        if template is None:
            return None, FixResult(success=False, reason=self._miss_reason(error))

        try:
            outcome = template.strategy.attempt(error, content, context)
        except Exception as e:
            logger.debug(
                f"Template {template.qualified_name} raised for "
                f"{error.location()}: {e}",
                exc_info=True,
            )
            return template, FixResult(
                success=False,
                fix_type=template.name,
                method=METHOD_TEMPLATE,
                reason=f"Fix generation error: {e}",
                confidence=template.confidence,
                auto_fixable=template.auto_fixable,
            )

        return template, _template_result(template, outcome)

    def generate_template_fix(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> FixResult:
        """Generate a fix using templates only.

        Args:
            error: The classified diagnostic.
            content: Current file content. Never mutated.
            context: Optional context bundle passed to the strategy.

        Returns:
            FixResult: Deterministic result, successful or not. Failed
                results carry manual-review suggestions.
        """
        template, result = self._run_template(error, content, context)
        return self._finish(error, template, result, context)

    async def generate_fix(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> FixResult:
        """Generate a fix, falling back to AI when templates cannot.

        Args:
            error: The classified diagnostic.
            content: Current file content. Never mutated.
            context: Optional context bundle. When omitted, the AI path
                receives a bundle holding just the file path and content.

        Returns:
            FixResult: The deterministic result when a template succeeded,
                otherwise the AI result if AI is configured, otherwise the
                deterministic failure. Failed results carry manual-review
                suggestions.
        """
        template, result = self._run_template(error, content, context)

        if not result.success and self.ai_generator is not None:
            logger.debug(
                f"No template fix for {error.location()} ({result.reason}), "
                f"falling back to AI",
            )
            ai_context = context
            if ai_context is None:
                ai_context = FixContext(file_path=error.file, file_content=content)
            outcome = await self.ai_generator.generate_fix(error, ai_context)
            result = _ai_result(outcome)

        return self._finish(error, template, result, context)

    async def generate_fixes(
        self,
        requests: Sequence[FixRequest],
        *,
        max_concurrency: int | None = None,
    ) -> list[FixResult]:
        """Run independent fix requests concurrently.

        Args:
            requests: Requests to process.
            max_concurrency: Maximum requests in flight at once. Defaults to
                the AI generator's ``max_parallel_calls`` when AI is
                configured, otherwise ``DEFAULT_MAX_CONCURRENCY``.

        Returns:
            list[FixResult]: One result per request, in input order.

        Raises:
            ValueError: If ``max_concurrency`` is less than 1.
        """
        if max_concurrency is None:
            max_concurrency = (
                self.ai_generator.config.max_parallel_calls
                if self.ai_generator is not None
                else DEFAULT_MAX_CONCURRENCY
            )
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        if not requests:
            return []

        semaphore = asyncio.Semaphore(max_concurrency)

        async def run(request: FixRequest) -> FixResult:
            async with semaphore:
                return await self.generate_fix(
                    request.error,
                    request.content,
                    request.context,
                )

        logger.debug(
            f"Generating fixes for {len(requests)} errors "
            f"(max_concurrency={max_concurrency})",
        )
        results = await asyncio.gather(*(run(request) for request in requests))
        return list(results)

    def _miss_reason(self, error: ClassifiedError) -> str:
        error_type = error.error_type
        if error_type is None or not any(
            template.error_type == error_type for template in self.registry
        ):
            return f"No fix templates available for error type: {error.type}"
        return f"No matching fix template found for error message: {error.message}"

    def _finish(
        self,
        error: ClassifiedError,
        template: FixTemplate | None,
        result: FixResult,
        context: FixContext | None,
    ) -> FixResult:
        if not result.success:
            result = replace(result, suggestions=build_suggestions(error, context))
        complexity = result.metadata.complexity if result.metadata else None
        self.stats.record(
            success=result.success,
            auto_fixable=template is not None and template.auto_fixable,
            method=result.method,
            error_type=str(error.type),
            complexity=str(complexity) if complexity else None,
            confidence=result.confidence,
        )
        return result

    def get_stats(self) -> dict[str, Any]:
        """Return the counters, success rate and breakdowns as a camelCase dict."""
        return self.stats.snapshot().to_dict()

    def reset_stats(self) -> None:
        """Zero all counters."""
        self.stats.reset()

    def available_fix_types(self) -> list[str]:
        """Return ``"<error_type>.<name>"`` for every registered template."""
        return self.registry.available_fix_types()

    def is_auto_fixable(self, error: ClassifiedError) -> bool:
        """Return whether ``error`` classifies to an auto-fixable template."""
        return self.registry.is_auto_fixable(error)


def _template_result(
    template: FixTemplate,
    outcome: DeterministicFixOutcome,
) -> FixResult:
    if outcome.success:
        return FixResult(
            success=True,
            fix_type=template.name,
            method=METHOD_TEMPLATE,
            fix=outcome.fix,
            description=outcome.description,
            changes=outcome.changes,
            confidence=template.confidence,
            auto_fixable=template.auto_fixable,
        )
    return FixResult(
        success=False,
        fix_type=template.name,
        method=METHOD_TEMPLATE,
        description=outcome.description,
        reason=outcome.reason or "Fix generation failed",
        suggestion=outcome.suggestion,
        confidence=template.confidence,
        auto_fixable=template.auto_fixable,
    )


def _ai_result(outcome: AIFixOutcome) -> FixResult:
    return FixResult(
        success=outcome.success,
        fix_type=METHOD_AI,
        method=METHOD_AI,
        fix=outcome.fix,
        explanation=outcome.explanation,
        changes=outcome.changes,
        warnings=outcome.warnings,
        confidence=outcome.confidence,
        auto_fixable=False,
        reason=outcome.reason,
        raw_response=outcome.raw_response,
        metadata=outcome.metadata,
    )
