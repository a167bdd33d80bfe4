"""Classified diagnostic handed to the fix generator.

The diagnostic has already been bucketed into an error type by an
upstream classifier. Remedy only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from remedy.enums.error_type import ErrorType, normalize_error_type
from remedy.enums.severity_level import SeverityLevel, normalize_severity_level


@dataclass(frozen=True)
class ClassifiedError:
    """A compiler or linter diagnostic with its classification.

    Attributes:
        type: Error bucket. Values outside ``ErrorType`` are kept as
            lowercase strings; no template bucket exists for them.
        message: Human-readable diagnostic text.
        file: Path of the file the diagnostic points at.
        line: 1-based line number (0 means unknown).
        severity: Normalized severity. Unrecognized values fall back to
            ``SeverityLevel.MEDIUM``.
        column: 1-based column number (0 means unknown).
        code: Tool-specific rule or error code, if any.
    """

    type: ErrorType | str
    message: str
    file: str = field(default="")
    line: int = field(default=0)
    severity: SeverityLevel | str = field(default=SeverityLevel.MEDIUM)
    column: int = field(default=0)
    code: str = field(default="")

    def __post_init__(self) -> None:
        try:
            error_type: ErrorType | str = normalize_error_type(self.type)
        except ValueError:
            error_type = str(self.type).strip().lower()
        try:
            severity = normalize_severity_level(self.severity)
        except ValueError:
            severity = SeverityLevel.MEDIUM
        object.__setattr__(self, "type", error_type)
        object.__setattr__(self, "severity", severity)

    @property
    def error_type(self) -> ErrorType | None:
        """Return the error type when it names a known bucket.

        Returns:
            ErrorType | None: The bucket, or None for unknown types.
        """
        return self.type if isinstance(self.type, ErrorType) else None

    def location(self) -> str:
        """Return a ``file:line`` string for log and display output."""
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file
