"""Data models for fix requests and fix outcomes."""

from remedy.models.change import Change
from remedy.models.classified_error import ClassifiedError
from remedy.models.context import FixContext, ProjectInfo, RelatedFile
from remedy.models.outcomes import (
    AIFixMetadata,
    AIFixOutcome,
    DeterministicFixOutcome,
    FixResult,
)
from remedy.models.suggestion import FixSuggestion

__all__ = [
    "AIFixMetadata",
    "AIFixOutcome",
    "Change",
    "ClassifiedError",
    "DeterministicFixOutcome",
    "FixContext",
    "FixResult",
    "FixSuggestion",
    "ProjectInfo",
    "RelatedFile",
]
