"""Prompt templates for AI fix generation."""

from remedy.ai.prompts.fix import (
    FIX_PROMPT_TEMPLATE,
    FIX_SYSTEM,
    build_fix_prompt,
    build_project_context,
    build_related_files_context,
)

__all__ = [
    "FIX_PROMPT_TEMPLATE",
    "FIX_SYSTEM",
    "build_fix_prompt",
    "build_project_context",
    "build_related_files_context",
]
