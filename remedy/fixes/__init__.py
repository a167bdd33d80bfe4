"""Fix generation: deterministic templates with an AI fallback."""

from remedy.fixes.generator import FixGenerator, FixRequest
from remedy.fixes.stats import FixStats

__all__ = ["FixGenerator", "FixRequest", "FixStats"]
