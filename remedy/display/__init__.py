"""Terminal rendering for fix results."""

from remedy.display.fixes import render_fix_result, render_fix_types

__all__ = ["render_fix_result", "render_fix_types"]
