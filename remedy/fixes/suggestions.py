"""Manual-review hints for errors that could not be fixed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from remedy.enums.error_type import ErrorType
from remedy.models.suggestion import FixSuggestion

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

ERROR_TYPE_SUGGESTIONS: dict[ErrorType, FixSuggestion] = {
    ErrorType.TYPE: FixSuggestion(
        type="manual",
        description="Check TypeScript type definitions and imports",
        confidence=0.5,
        action="manual_review",
    ),
    ErrorType.SYNTAX: FixSuggestion(
        type="manual",
        description="Review code syntax around the error line",
        confidence=0.7,
        action="syntax_check",
    ),
    ErrorType.IMPORT: FixSuggestion(
        type="manual",
        description="Check import/export statements and file paths",
        confidence=0.8,
        action="import_review",
    ),
    ErrorType.SCOPE: FixSuggestion(
        type="manual",
        description="Verify variable/function declarations and scope",
        confidence=0.6,
        action="scope_check",
    ),
}


def build_suggestions(
    error: ClassifiedError,
    context: FixContext | None = None,
) -> tuple[FixSuggestion, ...]:
    """Collect manual-review hints for an unfixed error.

    Args:
        error: The diagnostic that was not fixed.
        context: Optional context; related files and framework add hints.

    Returns:
        tuple[FixSuggestion, ...]: Hints, most useful first.
    """
    suggestions: list[FixSuggestion] = []

    error_type = error.error_type
    if error_type in ERROR_TYPE_SUGGESTIONS:
        suggestions.append(ERROR_TYPE_SUGGESTIONS[error_type])

    if context is not None:
        if context.related_files:
            paths = ", ".join(f.path for f in context.related_files)
            suggestions.append(
                FixSuggestion(
                    type="context",
                    description=f"Review related files: {paths}",
                    confidence=0.4,
                    action="check_related",
                ),
            )
        if context.framework:
            suggestions.append(
                FixSuggestion(
                    type="framework",
                    description=f"Check {context.framework} documentation and patterns",
                    confidence=0.3,
                    action="framework_docs",
                ),
            )

    return tuple(sorted(suggestions, key=lambda s: s.confidence, reverse=True))
