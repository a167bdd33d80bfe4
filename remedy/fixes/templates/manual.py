"""Strategies for categories that need semantic or project knowledge.

These always decline so the fix generator hands the error to the AI
path. Some attach a suggestion for the user.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.text import split_lines
from remedy.models.outcomes import DeterministicFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

_NAME_RE = re.compile(r"cannot find name ['\"](.+?)['\"]", re.IGNORECASE)


class DeclineStrategy(FixStrategy):
    """Decline every request with a fixed reason."""

    def __init__(self, reason: str) -> None:
        """Initialize the strategy.

        Args:
            reason: Reason reported with every declined outcome.
        """
        self.reason = reason

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Return a declined outcome."""
        return DeterministicFixOutcome.declined(self.reason)


class CannotFindNameStrategy(FixStrategy):
    """Decline, suggesting an import when the file already has imports."""

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Decline with an import suggestion where one makes sense.

        Import suggestions are never applied automatically: the module the
        name lives in is unknown at this layer.

        Args:
            error: Diagnostic naming the missing identifier.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: Always declined.
        """
        match = _NAME_RE.search(error.message or "")
        if not match:
            return DeterministicFixOutcome.declined("Could not extract variable name")

        name = match.group(1)
        if find_imports_end(split_lines(content)) is not None:
            return DeterministicFixOutcome.declined(
                "Import suggestion generated",
                suggestion=f"import {{ {name} }} from './path-to-module';",
                description=f"Consider adding import for '{name}'",
            )

        return DeterministicFixOutcome.declined(
            "Cannot automatically determine fix for missing name",
        )


def find_imports_end(lines: list[str]) -> int | None:
    """Return the index of the first non-import line after the import block.

    Blank lines and ``//`` comments inside the block are skipped.

    Args:
        lines: Lines of the file.

    Returns:
        int | None: Index just past the import block, or None when the
            file has no import block followed by code.
    """
    start: int | None = None
    for i, raw in enumerate(lines):
        line = raw.strip()
        if start is None:
            if line.startswith("import "):
                start = i
            continue
        if not line.startswith("import ") and not line.startswith("//") and line:
            return i
    return None
