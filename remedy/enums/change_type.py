"""Kinds of text edits a fix can describe."""

from __future__ import annotations

from enum import StrEnum, auto


class ChangeType(StrEnum):
    """Type of a single line/column-addressed edit."""

    INSERT = auto()
    DELETE = auto()
    REPLACE = auto()
    MODIFY = auto()
    CLEANUP = auto()


def normalize_change_type(value: object) -> ChangeType:
    """Map a raw change type to a ChangeType, defaulting to MODIFY.

    AI responses are not trusted to use the documented vocabulary, so
    unknown or missing values degrade to a generic modification.

    Args:
        value: Raw value, usually a string from a JSON payload.

    Returns:
        ChangeType: The matching member, or MODIFY when unrecognized.
    """
    if isinstance(value, ChangeType):
        return value
    if isinstance(value, str):
        try:
            return ChangeType(value.strip().lower())
        except ValueError:
            pass
    return ChangeType.MODIFY
