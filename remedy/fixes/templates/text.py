"""Line-level text helpers shared by the deterministic strategies.

Content is split on ``"\\n"`` and re-joined with ``"\\n"`` so that line
endings, including a trailing newline, survive a fix unchanged.
"""

from __future__ import annotations

import re

# Control-flow statements that make a following statement unreachable.
TERMINATING_KEYWORDS: tuple[str, ...] = ("return", "throw", "break")


def split_lines(content: str) -> list[str]:
    """Split content into lines, keeping a trailing empty segment."""
    return content.split("\n")


def join_lines(lines: list[str]) -> str:
    """Inverse of :func:`split_lines`."""
    return "\n".join(lines)


def line_index(line: int, lines: list[str]) -> int | None:
    """Convert a 1-based line number into a valid 0-based index.

    Args:
        line: 1-based line number from a diagnostic.
        lines: Lines of the file.

    Returns:
        int | None: The index, or None when the line is out of range.
    """
    index = line - 1
    if 0 <= index < len(lines):
        return index
    return None


def first_group(message: str, patterns: tuple[re.Pattern[str], ...]) -> str | None:
    """Return the first capture group of the first matching pattern."""
    for pattern in patterns:
        match = pattern.search(message or "")
        if match:
            return match.group(1).strip()
    return None


def declaration_patterns(name: str) -> tuple[re.Pattern[str], ...]:
    """Build regexes matching a variable or function declaration of ``name``.

    Args:
        name: Identifier to look for.

    Returns:
        tuple[re.Pattern[str], ...]: Patterns for ``const``/``let``/``var``
            assignments and bare declarations, and for plain and async
            function declarations.
    """
    ident = re.escape(name)
    return (
        re.compile(rf"\b(?:const|let|var)\s+{ident}\s*=[^;]*;?"),
        re.compile(rf"\b(?:const|let|var)\s+{ident}\s*;"),
        re.compile(rf"\bfunction\s+{ident}\s*\("),
        re.compile(rf"\basync\s+function\s+{ident}\s*\("),
    )
