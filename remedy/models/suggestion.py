"""Manual-review hints attached to results that carry no fix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FixSuggestion:
    """A hint for the user when no fix could be produced.

    Attributes:
        type: Source of the hint: ``"manual"``, ``"context"`` or
            ``"framework"``.
        description: Human-readable hint.
        confidence: Relative usefulness in [0, 1], used for ordering.
        action: Short machine-readable action name.
    """

    type: str
    description: str
    confidence: float = field(default=0.0)
    action: str = field(default="")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict."""
        return {
            "type": self.type,
            "description": self.description,
            "confidence": self.confidence,
            "action": self.action,
        }
