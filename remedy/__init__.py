"""Remedy: template and AI-assisted source code repair.

Given a classified diagnostic and the file it points at, remedy proposes a
textual fix. Deterministic templates are tried first; an optional AI
provider handles whatever the templates cannot.
"""

from remedy.enums import ChangeType, ErrorType, FixComplexity, SeverityLevel
from remedy.fixes.generator import FixGenerator, FixRequest
from remedy.fixes.stats import FixStats
from remedy.fixes.templates.registry import TemplateRegistry, build_default_registry
from remedy.models import (
    AIFixOutcome,
    Change,
    ClassifiedError,
    DeterministicFixOutcome,
    FixContext,
    FixResult,
    FixSuggestion,
    ProjectInfo,
    RelatedFile,
)

__version__ = "0.4.0"

__all__ = [
    "AIFixOutcome",
    "Change",
    "ChangeType",
    "ClassifiedError",
    "DeterministicFixOutcome",
    "ErrorType",
    "FixComplexity",
    "FixContext",
    "FixGenerator",
    "FixRequest",
    "FixResult",
    "FixStats",
    "FixSuggestion",
    "ProjectInfo",
    "RelatedFile",
    "SeverityLevel",
    "TemplateRegistry",
    "build_default_registry",
]
