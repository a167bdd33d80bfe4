"""Error type buckets assigned by the upstream classifier."""

from __future__ import annotations

from enum import StrEnum, auto


class ErrorType(StrEnum):
    """Category of a classified diagnostic.

    Each value names one bucket of fix templates in the registry.
    """

    SYNTAX = auto()
    TYPE = auto()
    IMPORT = auto()
    UNUSED = auto()
    SCOPE = auto()
    STYLE = auto()
    REACT = auto()


def normalize_error_type(value: str | ErrorType) -> ErrorType:
    """Normalize a raw value to an ErrorType.

    Args:
        value: An ErrorType or a case-insensitive string name.

    Returns:
        ErrorType: The matching member.

    Raises:
        ValueError: If the value does not name a known error type.
    """
    if isinstance(value, ErrorType):
        return value
    try:
        return ErrorType(str(value).strip().lower())
    except ValueError:
        supported = ", ".join(member.value for member in ErrorType)
        raise ValueError(
            f"Unknown error type: {value!r}. Supported types: {supported}",
        ) from None
