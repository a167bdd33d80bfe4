"""Shared helpers and fixtures for fix generation tests."""

from __future__ import annotations

import difflib

import pytest

from remedy.fixes.templates.registry import TemplateRegistry, build_default_registry
from remedy.models.change import Change
from remedy.models.classified_error import ClassifiedError


def touched_original_lines(original: str, fixed: str) -> set[int]:
    """Return the 1-based original line numbers a diff touches.

    Pure insertions are reported as the line they were inserted before.
    """
    matcher = difflib.SequenceMatcher(
        a=original.split("\n"),
        b=fixed.split("\n"),
        autojunk=False,
    )
    touched: set[int] = set()
    for tag, i1, i2, _j1, _j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        if i1 == i2:
            touched.add(i1 + 1)
        else:
            touched.update(range(i1 + 1, i2 + 1))
    return touched


def assert_changes_cover_diff(original: str, fixed: str, changes: tuple[Change, ...]) -> None:
    """Assert that every line the fix touched lies within a reported change."""
    covered: set[int] = set()
    for change in changes:
        span = change.line_span()
        assert span is not None, f"change without line: {change}"
        covered.update(range(span[0], span[1] + 1))
    outside = touched_original_lines(original, fixed) - covered
    assert not outside, f"lines changed outside reported changes: {sorted(outside)}"


def make_error(error_type: str, message: str, line: int = 1, file: str = "src/app.js") -> ClassifiedError:
    """Build a classified error with sensible defaults."""
    return ClassifiedError(type=error_type, message=message, file=file, line=line)


@pytest.fixture(scope="module")
def registry() -> TemplateRegistry:
    """Return the built-in template catalog."""
    return build_default_registry()
