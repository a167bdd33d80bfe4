"""Severity levels reported by the upstream classifier."""

from __future__ import annotations

from enum import StrEnum, auto

# Common aliases emitted by compilers and linters.
_ALIASES: dict[str, str] = {
    "error": "high",
    "fatal": "critical",
    "warning": "medium",
    "warn": "medium",
    "note": "info",
    "hint": "info",
}


class SeverityLevel(StrEnum):
    """Severity of a classified diagnostic, most severe first."""

    CRITICAL = auto()
    HIGH = auto()
    MEDIUM = auto()
    LOW = auto()
    INFO = auto()


def normalize_severity_level(value: str | SeverityLevel) -> SeverityLevel:
    """Normalize a raw severity string to a SeverityLevel.

    Args:
        value: A SeverityLevel or a raw severity string such as "error"
            or "warning".

    Returns:
        SeverityLevel: The normalized severity.

    Raises:
        ValueError: If the value cannot be mapped to a severity.
    """
    if isinstance(value, SeverityLevel):
        return value
    key = str(value).strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return SeverityLevel(key)
    except ValueError:
        raise ValueError(f"Unknown severity level: {value!r}") from None
