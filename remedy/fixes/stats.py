"""Running counters for fix requests.

One ``FixStats`` instance belongs to one ``FixGenerator``. Counters only
ever increase (until an explicit reset) and every update happens under a
lock, so concurrent requests and concurrent readers never observe a
half-applied update.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

UNKNOWN = "unknown"
METHOD_TEMPLATE = "template"
METHOD_AI = "ai"


@dataclass(frozen=True)
class FixStatsSnapshot:
    """Point-in-time copy of the fix counters.

    Attributes:
        total_fixes: Requests processed.
        successful_fixes: Requests that produced a fix.
        failed_fixes: Requests that did not.
        auto_fixable_errors: Requests classified to an auto-fixable template.
        template_fixes: Requests answered by a template.
        ai_fixes: Requests answered by the AI path.
        by_error_type: Requests per error type.
        by_complexity: Requests per AI fix complexity; ``"unknown"`` for
            results without one.
        average_confidence: Mean result confidence over all requests.
        last_fix_time: ISO-8601 UTC time of the latest request, if any.
    """

    total_fixes: int = 0
    successful_fixes: int = 0
    failed_fixes: int = 0
    auto_fixable_errors: int = 0
    template_fixes: int = 0
    ai_fixes: int = 0
    by_error_type: dict[str, int] = field(default_factory=dict)
    by_complexity: dict[str, int] = field(default_factory=dict)
    average_confidence: float = 0.0
    last_fix_time: str | None = None

    @property
    def success_rate(self) -> float:
        """Return the success percentage rounded to one decimal place."""
        if self.total_fixes == 0:
            return 0.0
        return round(self.successful_fixes / self.total_fixes * 100, 1)

    def to_dict(self) -> dict[str, Any]:
        """Return the counters using the public camelCase keys."""
        return {
            "totalFixes": self.total_fixes,
            "successfulFixes": self.successful_fixes,
            "failedFixes": self.failed_fixes,
            "autoFixableErrors": self.auto_fixable_errors,
            "successRate": self.success_rate,
            "templateFixes": self.template_fixes,
            "aiFixes": self.ai_fixes,
            "averageConfidence": round(self.average_confidence, 2),
            "byErrorType": dict(self.by_error_type),
            "byComplexity": dict(self.by_complexity),
            "lastFixTime": self.last_fix_time,
        }


class FixStats:
    """Thread-safe, increment-only fix counters."""

    def __init__(self) -> None:
        """Initialize all counters to zero."""
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._total = 0
        self._successful = 0
        self._failed = 0
        self._auto_fixable = 0
        self._by_method: Counter[str] = Counter()
        self._by_error_type: Counter[str] = Counter()
        self._by_complexity: Counter[str] = Counter()
        self._confidence_sum = 0.0
        self._last_fix_time: str | None = None

    def record(
        self,
        *,
        success: bool,
        auto_fixable: bool = False,
        method: str | None = None,
        error_type: str | None = None,
        complexity: str | None = None,
        confidence: float = 0.0,
    ) -> None:
        """Record the outcome of exactly one fix request.

        Args:
            success: Whether the request produced a fix.
            auto_fixable: Whether the request classified to an
                auto-fixable template.
            method: ``"template"``, ``"ai"`` or None when no path ran.
            error_type: Error type of the request.
            complexity: Complexity of an AI fix, if reported.
            confidence: Confidence of the returned result.
        """
        now = datetime.now(UTC).isoformat()
        with self._lock:
            self._total += 1
            if success:
                self._successful += 1
            else:
                self._failed += 1
            if auto_fixable:
                self._auto_fixable += 1
            if method is not None:
                self._by_method[method] += 1
            self._by_error_type[error_type or UNKNOWN] += 1
            self._by_complexity[complexity or UNKNOWN] += 1
            self._confidence_sum += confidence
            self._last_fix_time = now

    def snapshot(self) -> FixStatsSnapshot:
        """Return a consistent copy of all counters."""
        with self._lock:
            return FixStatsSnapshot(
                total_fixes=self._total,
                successful_fixes=self._successful,
                failed_fixes=self._failed,
                auto_fixable_errors=self._auto_fixable,
                template_fixes=self._by_method[METHOD_TEMPLATE],
                ai_fixes=self._by_method[METHOD_AI],
                by_error_type=dict(self._by_error_type),
                by_complexity=dict(self._by_complexity),
                average_confidence=(
                    self._confidence_sum / self._total if self._total else 0.0
                ),
                last_fix_time=self._last_fix_time,
            )

    def reset(self) -> None:
        """Zero all counters."""
        with self._lock:
            self._reset()
