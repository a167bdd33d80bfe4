"""Prompt construction for AI fix generation.

``build_fix_prompt`` is pure: the same error and context always produce
the same prompt text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext, ProjectInfo, RelatedFile

MAX_RELATED_FILES = 3
MAX_DEPENDENCIES = 10

NO_PROJECT_CONTEXT = "- No specific project context available"
NO_RELATED_FILES = "No related files provided"
MISSING_FILE_CONTENT = "// File content not available"

FIX_SYSTEM = (
    "You are an expert software engineer fixing compiler and linter errors. "
    "Provide precise, minimal fixes that resolve the reported error "
    "without changing unrelated code. "
    "Respond ONLY with the requested JSON object."
)

FIX_PROMPT_TEMPLATE = """\
You are an expert software engineer helping fix a coding error. \
Please analyze the following error and provide a precise, working fix.

**ERROR DETAILS:**
- File: {file}
- Line: {line}
- Error Type: {error_type}
- Error Message: {message}
- Severity: {severity}

**CURRENT CODE CONTEXT:**
```
{file_content}
```

**PROJECT CONTEXT:**
{project_context}

**RELATED FILES:**
{related_files}

**INSTRUCTIONS:**
1. Analyze the error and understand its root cause
2. Provide a precise code fix that resolves the error
3. Explain why this fix works and any potential side effects
4. If the fix requires changes to multiple files, specify all changes needed
5. Ensure the fix follows best practices and project conventions

**RESPONSE FORMAT:**
Provide your response in JSON format with this structure:
{{
  "fix": "The exact code changes needed",
  "explanation": "Why this fix works",
  "confidence": 0.0-1.0,
  "changes": [
    {{
      "file": "relative/path/to/file",
      "type": "replace|insert|delete",
      "line": 123,
      "oldCode": "existing code to replace",
      "newCode": "new code to insert"
    }}
  ],
  "warnings": ["Any potential issues or side effects"]
}}

Be precise and provide only the JSON response, nothing else.
"""


def build_project_context(
    project_info: ProjectInfo,
    framework: str | None,
    dependencies: Sequence[str],
    *,
    max_dependencies: int = MAX_DEPENDENCIES,
) -> str:
    """Render the project context block.

    Each line is omitted when its value is unavailable.

    Args:
        project_info: Language, runtime and conventions.
        framework: Framework name, if detected.
        dependencies: Dependency names, most relevant first.
        max_dependencies: Number of dependency names listed.

    Returns:
        str: The block, or ``NO_PROJECT_CONTEXT`` when nothing is known.
    """
    lines: list[str] = []
    if framework:
        lines.append(f"- Framework: {framework}")
    if project_info.language:
        lines.append(f"- Language: {project_info.language}")
    if project_info.runtime_version:
        lines.append(f"- Runtime: {project_info.runtime_version}")
    selected = list(dependencies)[:max_dependencies]
    if selected:
        lines.append(f"- Key Dependencies: {', '.join(selected)}")
    if project_info.conventions:
        lines.append(f"- Project Conventions: {project_info.conventions}")
    return "\n".join(lines) if lines else NO_PROJECT_CONTEXT


def build_related_files_context(
    related_files: Sequence[RelatedFile],
    *,
    max_files: int = MAX_RELATED_FILES,
) -> str:
    """Render related files verbatim in fenced blocks.

    Args:
        related_files: Candidate files, most relevant first.
        max_files: Number of files included.

    Returns:
        str: The rendered files, or ``NO_RELATED_FILES`` when none.
    """
    selected = list(related_files)[:max_files]
    if not selected:
        return NO_RELATED_FILES
    blocks = [
        f"**{related.path}:**\n```\n{related.content or MISSING_FILE_CONTENT}\n```"
        for related in selected
    ]
    return "\n\n".join(blocks)


def build_fix_prompt(
    error: ClassifiedError,
    context: FixContext,
    *,
    max_related_files: int = MAX_RELATED_FILES,
    max_dependencies: int = MAX_DEPENDENCIES,
) -> str:
    """Build the user prompt asking the model to fix ``error``.

    Args:
        error: The classified diagnostic.
        context: File content, related files and project metadata.
        max_related_files: Related files included verbatim.
        max_dependencies: Dependency names listed.

    Returns:
        str: The rendered prompt.
    """
    return FIX_PROMPT_TEMPLATE.format(
        file=context.file_path or error.file,
        line=error.line,
        error_type=error.type,
        message=error.message,
        severity=error.severity,
        file_content=context.file_content,
        project_context=build_project_context(
            context.project_info,
            context.framework,
            context.dependencies,
            max_dependencies=max_dependencies,
        ),
        related_files=build_related_files_context(
            context.related_files,
            max_files=max_related_files,
        ),
    )
