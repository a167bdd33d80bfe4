"""Style and lint strategies."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from remedy.enums.change_type import ChangeType
from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.text import join_lines, line_index, split_lines
from remedy.models.change import Change
from remedy.models.outcomes import DeterministicFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

_DEBUGGER_RE = re.compile(r"\bdebugger\b")


class TrailingWhitespaceStrategy(FixStrategy):
    """Strip trailing whitespace from every line of the file.

    Idempotent: a second run finds nothing to strip and declines, which
    callers should read as "nothing to do".
    """

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Remove trailing spaces and tabs, keeping CRLF line endings.

        Args:
            error: Diagnostic reporting trailing whitespace.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``cleanup`` change per touched
                line on success.
        """
        lines = split_lines(content)
        changes: list[Change] = []

        for i, line in enumerate(lines):
            body, eol = (line[:-1], "\r") if line.endswith("\r") else (line, "")
            stripped = body.rstrip()
            if stripped != body:
                lines[i] = stripped + eol
                changes.append(
                    Change(
                        type=ChangeType.CLEANUP,
                        line=i + 1,
                        column=len(stripped),
                        text=body[len(stripped):],
                        description="Removed trailing whitespace",
                    ),
                )

        if not changes:
            return DeterministicFixOutcome.declined("No trailing whitespace found")

        plural = "s" if len(changes) != 1 else ""
        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description=f"Removed trailing whitespace from {len(changes)} line{plural}",
            changes=changes,
        )


class ConsoleStatementStrategy(FixStrategy):
    """Comment out a console statement rather than deleting it."""

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Prefix the console line with ``// `` after its indentation.

        Args:
            error: Diagnostic pointing at the console statement.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``modify`` change on success.
        """
        lines = split_lines(content)
        index = line_index(error.line, lines)
        if index is None or "console." not in lines[index]:
            return DeterministicFixOutcome.declined("Could not locate console statement")

        line = lines[index]
        body = line.lstrip()
        indent = line[: len(line) - len(body)]
        lines[index] = f"{indent}// {body}"
        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description="Commented out console statement",
            changes=[
                Change(type=ChangeType.MODIFY, line=error.line, text=f"// {line.strip()}"),
            ],
        )


class DebuggerStatementStrategy(FixStrategy):
    """Delete a ``debugger`` statement line outright."""

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Remove the debugger line.

        Args:
            error: Diagnostic pointing at the debugger statement.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``delete`` change on success.
        """
        lines = split_lines(content)
        index = line_index(error.line, lines)
        if index is None or not _DEBUGGER_RE.search(lines[index]):
            return DeterministicFixOutcome.declined("Could not locate debugger statement")

        line = lines.pop(index)
        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description="Removed debugger statement",
            changes=[Change(type=ChangeType.DELETE, line=error.line, text=line.strip())],
        )
