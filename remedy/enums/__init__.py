"""Enumerations used across remedy."""

from remedy.enums.change_type import ChangeType, normalize_change_type
from remedy.enums.error_type import ErrorType, normalize_error_type
from remedy.enums.fix_complexity import FixComplexity
from remedy.enums.severity_level import SeverityLevel, normalize_severity_level

__all__ = [
    "ChangeType",
    "ErrorType",
    "FixComplexity",
    "SeverityLevel",
    "normalize_change_type",
    "normalize_error_type",
    "normalize_severity_level",
]
