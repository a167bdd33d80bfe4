"""Context bundle gathered around a diagnostic."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RelatedFile:
    """A file related to the one being fixed.

    Attributes:
        path: Path shown to the model.
        content: File content, possibly empty when unreadable.
    """

    path: str
    content: str = field(default="")


@dataclass(frozen=True)
class ProjectInfo:
    """Project metadata included in AI prompts.

    Attributes:
        language: Primary language (e.g. "TypeScript").
        runtime_version: Runtime version string (e.g. "20.11.0").
        conventions: Free-form description of project conventions.
    """

    language: str | None = field(default=None)
    runtime_version: str | None = field(default=None)
    conventions: str | None = field(default=None)


@dataclass(frozen=True)
class FixContext:
    """Everything known about the file and project around an error.

    Attributes:
        file_path: Path of the file being fixed.
        file_content: Current content of that file.
        related_files: Files that may help explain the error.
        project_info: Language, runtime and conventions.
        framework: Detected framework name, if any.
        dependencies: Dependency names, most relevant first.
    """

    file_path: str = field(default="")
    file_content: str = field(default="")
    related_files: Sequence[RelatedFile] = field(default_factory=tuple)
    project_info: ProjectInfo = field(default_factory=ProjectInfo)
    framework: str | None = field(default=None)
    dependencies: Sequence[str] = field(default_factory=tuple)
