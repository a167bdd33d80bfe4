"""Advisory complexity buckets for AI-proposed fixes."""

from __future__ import annotations

from enum import StrEnum, auto


class FixComplexity(StrEnum):
    """Structural size of a proposed fix."""

    SIMPLE = auto()
    MEDIUM = auto()
    COMPLEX = auto()
