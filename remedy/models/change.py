"""Descriptive record of a single text edit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from remedy.enums.change_type import ChangeType, normalize_change_type


@dataclass(frozen=True)
class Change:
    """A line/column-addressed edit reported alongside a fix.

    Changes are descriptive only. The authoritative result of a fix is
    the full new file text; changes exist so callers can render a diff or
    confirmation prompt. Line numbers refer to the original content.

    Attributes:
        type: Kind of edit.
        line: 1-based line in the original content, if known.
        column: 0-based column within the line, if relevant.
        text: Inserted or removed text.
        old_code: Code being replaced (AI changes).
        new_code: Replacement code (AI changes).
        file: Target file when a change spans several files.
        end_line: Last affected line for multi-line edits.
        description: Free-form description for changes without a line.
    """

    type: ChangeType
    line: int | None = field(default=None)
    column: int | None = field(default=None)
    text: str | None = field(default=None)
    old_code: str | None = field(default=None)
    new_code: str | None = field(default=None)
    file: str | None = field(default=None)
    end_line: int | None = field(default=None)
    description: str | None = field(default=None)

    def line_span(self) -> tuple[int, int] | None:
        """Return the inclusive original-line range this change touches.

        Returns:
            tuple[int, int] | None: ``(first, last)`` or None when the
                change carries no line information.
        """
        if self.line is None:
            return None
        return self.line, self.end_line if self.end_line is not None else self.line

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict, omitting unset fields.

        Returns:
            dict[str, Any]: Change fields using camelCase keys.
        """
        data: dict[str, Any] = {"type": str(self.type)}
        for key, value in (
            ("file", self.file),
            ("line", self.line),
            ("endLine", self.end_line),
            ("column", self.column),
            ("text", self.text),
            ("oldCode", self.old_code),
            ("newCode", self.new_code),
            ("description", self.description),
        ):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Change:
        """Build a change from an untrusted dict, e.g. an AI payload entry.

        Non-integer line numbers and non-string code fields are dropped
        rather than rejected.

        Args:
            data: Mapping with camelCase or snake_case keys.

        Returns:
            Change: The parsed change.
        """

        def _int(key: str, alt: str | None = None) -> int | None:
            value = data.get(key, data.get(alt) if alt else None)
            if isinstance(value, bool) or not isinstance(value, int):
                return None
            return value

        def _str(key: str, alt: str | None = None) -> str | None:
            value = data.get(key, data.get(alt) if alt else None)
            return value if isinstance(value, str) else None

        return cls(
            type=normalize_change_type(data.get("type")),
            line=_int("line"),
            column=_int("column"),
            text=_str("text"),
            old_code=_str("oldCode", "old_code"),
            new_code=_str("newCode", "new_code"),
            file=_str("file"),
            end_line=_int("endLine", "end_line"),
            description=_str("description"),
        )
