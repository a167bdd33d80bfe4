"""Strategies that delete unused or unreachable code."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from loguru import logger

from remedy.enums.change_type import ChangeType
from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.text import (
    TERMINATING_KEYWORDS,
    declaration_patterns,
    first_group,
    join_lines,
    line_index,
    split_lines,
)
from remedy.models.change import Change
from remedy.models.outcomes import DeterministicFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

_QUOTES = "'\"`"

UNUSED_VARIABLE_MESSAGES: tuple[re.Pattern[str], ...] = (
    re.compile(r"'(.+?)' is defined but never used", re.IGNORECASE),
    re.compile(r'"(.+?)" is defined but never used', re.IGNORECASE),
    re.compile(r"['\"`](.+?)['\"`] is assigned a value but never used", re.IGNORECASE),
    re.compile(r"unused variable:?\s+(.+?)$", re.IGNORECASE),
)

UNUSED_IMPORT_MESSAGES: tuple[re.Pattern[str], ...] = (
    re.compile(r"['\"`](.+?)['\"`] is imported but never used", re.IGNORECASE),
    re.compile(r"['\"`](.+?)['\"`] is defined but never used", re.IGNORECASE),
    re.compile(r"unused import:?\s+(.+?)$", re.IGNORECASE),
)

_TERMINATING_RE = re.compile(rf"\b(?:{'|'.join(TERMINATING_KEYWORDS)})\b")


class UnusedVariableStrategy(FixStrategy):
    """Delete the declaration line of an unused variable or function.

    The error line is checked first, then the ``window`` lines above it
    and the ``window - 1`` lines below it. Nothing outside the window is
    considered.
    """

    def __init__(self, window: int = 3) -> None:
        """Initialize the strategy.

        Args:
            window: Lines searched above the error line; one fewer is
                searched below it.
        """
        self.window = window

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Remove the declaration named in the error message.

        Args:
            error: Diagnostic naming the unused identifier.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``delete`` change on success.
        """
        name = first_group(error.message, UNUSED_VARIABLE_MESSAGES)
        name = name.strip(_QUOTES) if name else None
        if not name:
            return DeterministicFixOutcome.declined(
                "Could not extract variable name from error message",
            )

        lines = split_lines(content)
        patterns = declaration_patterns(name)
        index = error.line - 1

        candidates: list[int] = []
        if 0 <= index < len(lines):
            candidates.append(index)
        start = max(0, index - self.window)
        end = min(len(lines), index + self.window)
        candidates.extend(i for i in range(start, end) if i != index)

        for i in candidates:
            line = lines[i]
            stripped = line.strip()
            if any(pattern.search(stripped) for pattern in patterns):
                del lines[i]
                logger.debug(f"Removing unused declaration of {name!r} at line {i + 1}")
                return DeterministicFixOutcome.succeeded(
                    fix=join_lines(lines),
                    description=f"Removed unused variable '{name}'",
                    changes=[Change(type=ChangeType.DELETE, line=i + 1, text=line)],
                )

        return DeterministicFixOutcome.declined(
            f"Could not locate unused variable '{name}' declaration",
        )


class UnusedImportStrategy(FixStrategy):
    """Delete the import line that mentions an unused binding.

    The whole line is removed, including any other bindings it imports;
    multi-binding lines are not rewritten.
    """

    _IMPORT_LINE_RE = re.compile(r"^\s*(?:import\b|from\b|export\b.*\bfrom\b)|\brequire\s*\(")

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Remove the first import line mentioning the unused name.

        Args:
            error: Diagnostic naming the unused import.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``delete`` change on success.
        """
        name = first_group(error.message, UNUSED_IMPORT_MESSAGES)
        name = name.strip(_QUOTES) if name else None
        if not name:
            return DeterministicFixOutcome.declined("Could not extract import name")

        ident = re.escape(name)
        mentions = (
            re.compile(rf"\bimport\s+{ident}\b"),
            re.compile(rf",\s*{ident}\b"),
            re.compile(rf"\{{\s*{ident}\b"),
        )

        lines = split_lines(content)
        for i, line in enumerate(lines):
            if not self._IMPORT_LINE_RE.search(line):
                continue
            if any(pattern.search(line) for pattern in mentions):
                del lines[i]
                return DeterministicFixOutcome.succeeded(
                    fix=join_lines(lines),
                    description=f"Removed unused import '{name}'",
                    changes=[Change(type=ChangeType.DELETE, line=i + 1, text=line)],
                )

        return DeterministicFixOutcome.declined("Could not locate unused import")


class UnreachableCodeStrategy(FixStrategy):
    """Delete the unreachable span starting at the error line.

    Scans forward tracking brace depth and stops at the first blank line
    at depth zero or below (exclusive) or the first terminating statement
    (inclusive).
    """

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Remove the unreachable block.

        Args:
            error: Diagnostic pointing at the first unreachable line.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One multi-line ``delete`` change on
                success.
        """
        lines = split_lines(content)
        start = line_index(error.line, lines)
        if start is None:
            return DeterministicFixOutcome.declined(
                "Could not safely identify unreachable code boundaries",
            )

        end = start
        depth = 0
        for i in range(start, len(lines)):
            line = lines[i]
            depth += line.count("{") - line.count("}")
            if depth <= 0 and line.strip() == "":
                end = i
                break
            if _TERMINATING_RE.search(line):
                end = i + 1
                break

        if end <= start:
            return DeterministicFixOutcome.declined(
                "Could not safely identify unreachable code boundaries",
            )

        del lines[start:end]
        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description="Removed unreachable code",
            changes=[
                Change(
                    type=ChangeType.DELETE,
                    line=start + 1,
                    end_line=end,
                    text="unreachable code block",
                ),
            ],
        )
