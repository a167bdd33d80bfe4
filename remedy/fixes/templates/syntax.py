"""Syntax error strategies: missing terminators and unbalanced braces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from remedy.enums.change_type import ChangeType
from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.text import join_lines, line_index, split_lines
from remedy.models.change import Change
from remedy.models.outcomes import DeterministicFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

# Lines ending in one of these are already terminated or open/close a block.
_NO_TERMINATOR_ENDINGS: tuple[str, ...] = (";", ",", "{", "}")
_COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*")
# Statements presumed well-formed or not needing a terminator here.
_CONTROL_FLOW_MARKERS: tuple[str, ...] = ("return ", "throw ", "break", "continue")


class MissingTerminatorStrategy(FixStrategy):
    """Append a statement terminator to the reported line."""

    def __init__(self, terminator: str = ";") -> None:
        """Initialize the strategy.

        Args:
            terminator: Text appended to the line.
        """
        self.terminator = terminator

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Append the terminator when the line is a plain statement.

        The check runs on the stripped line; the terminator is appended to
        the original line so indentation and trailing text are untouched.

        Args:
            error: Diagnostic pointing at the unterminated line.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``insert`` change on success.
        """
        lines = split_lines(content)
        index = line_index(error.line, lines)
        if index is None:
            return DeterministicFixOutcome.declined("Could not safely add semicolon")

        line = lines[index]
        stripped = line.strip()
        if (
            not stripped
            or stripped.endswith((*_NO_TERMINATOR_ENDINGS, self.terminator))
            or stripped.startswith(_COMMENT_PREFIXES)
            or any(marker in stripped for marker in _CONTROL_FLOW_MARKERS)
        ):
            return DeterministicFixOutcome.declined("Could not safely add semicolon")

        lines[index] = line + self.terminator
        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description="Added missing semicolon",
            changes=[
                Change(
                    type=ChangeType.INSERT,
                    line=error.line,
                    column=len(line),
                    text=self.terminator,
                ),
            ],
        )


class BracketBalanceStrategy(FixStrategy):
    """Insert a missing ``{`` or append a missing ``}``.

    A single forward scan counts braces, parentheses and square brackets.
    Only curly braces drive the fix: the first line where the running
    brace count goes negative gets an opening brace inserted before it;
    otherwise a positive final count gets a closing brace at the end of
    the file. Braces inside strings and comments are counted like any
    other, so this is a heuristic rather than a parser.
    """

    _DELTAS: dict[str, tuple[int, int]] = {
        "{": (0, 1),
        "}": (0, -1),
        "(": (1, 1),
        ")": (1, -1),
        "[": (2, 1),
        "]": (2, -1),
    }

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Balance curly braces in ``content``.

        Args:
            error: Diagnostic reporting the missing or unclosed bracket.
            content: Current file content.
            context: Unused.

        Returns:
            DeterministicFixOutcome: One ``insert`` change on success.
        """
        lines = split_lines(content)
        # braces, parentheses, square brackets
        counts = [0, 0, 0]

        for i, line in enumerate(lines):
            for char in line:
                delta = self._DELTAS.get(char)
                if delta is not None:
                    counts[delta[0]] += delta[1]
            if counts[0] < 0:
                lines.insert(i, "  {")
                logger.debug(f"Brace count went negative at line {i + 1}")
                return DeterministicFixOutcome.succeeded(
                    fix=join_lines(lines),
                    description="Added missing opening brace",
                    changes=[
                        Change(type=ChangeType.INSERT, line=i + 1, column=1, text="  {"),
                    ],
                )

        if counts[0] > 0:
            if lines[-1] == "":
                # Keep the trailing newline after the appended brace.
                lines[-1] = "}"
                lines.append("")
                new_line = len(lines) - 1
            else:
                lines.append("}")
                new_line = len(lines)
            return DeterministicFixOutcome.succeeded(
                fix=join_lines(lines),
                description="Added missing closing brace",
                changes=[
                    Change(type=ChangeType.INSERT, line=new_line, column=1, text="}"),
                ],
            )

        return DeterministicFixOutcome.declined(
            "Could not determine bracket issue location",
        )


class UnexpectedTokenStrategy(FixStrategy):
    """Decline: unexpected tokens need context the text layer lacks."""

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Always decline so the request falls through to the AI path."""
        return DeterministicFixOutcome.declined(
            "Unexpected token errors usually require manual review",
        )
