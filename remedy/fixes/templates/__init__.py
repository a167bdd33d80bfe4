"""Deterministic fix templates and the registry that classifies errors."""

from remedy.fixes.templates.base import FixStrategy, FixTemplate
from remedy.fixes.templates.registry import TemplateRegistry, build_default_registry

__all__ = [
    "FixStrategy",
    "FixTemplate",
    "TemplateRegistry",
    "build_default_registry",
]
