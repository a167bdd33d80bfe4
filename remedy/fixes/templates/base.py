"""Template and strategy contracts.

A ``FixStrategy`` implements one deterministic repair. A ``FixTemplate``
pairs a strategy with the message pattern that selects it and the static
confidence and auto-fixable flag reported with its results.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from remedy.enums.error_type import ErrorType
from remedy.exceptions.errors import TemplateRegistrationError

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext
    from remedy.models.outcomes import DeterministicFixOutcome


class FixStrategy(ABC):
    """A single deterministic repair strategy.

    Strategies are pure: they never mutate the content they receive and
    never raise for expected "cannot fix" situations. They either return
    the entire new file text or decline with a reason.
    """

    @abstractmethod
    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Try to fix ``error`` in ``content``.

        Args:
            error: The classified diagnostic.
            content: Current file content.
            context: Optional context bundle around the error.

        Returns:
            DeterministicFixOutcome: The new content and changes, or a
                declined outcome with a reason.
        """
        ...


@dataclass(frozen=True)
class FixTemplate:
    """A registered (pattern, strategy, confidence, auto-fixable) tuple.

    Attributes:
        name: Template name, unique within its error type bucket.
        error_type: Bucket this template belongs to.
        pattern: Case-insensitive regex matched against error messages.
        strategy: Strategy invoked when the template is selected.
        confidence: Static confidence in [0, 1].
        auto_fixable: Whether results may be applied without review.
    """

    name: str
    error_type: ErrorType
    pattern: re.Pattern[str]
    strategy: FixStrategy
    confidence: float
    auto_fixable: bool = field(default=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise TemplateRegistrationError("Fix template name must not be empty")
        if not isinstance(self.error_type, ErrorType):
            raise TemplateRegistrationError(
                f"Template {self.name!r} has invalid error type "
                f"{self.error_type!r}",
            )
        if not isinstance(self.strategy, FixStrategy):
            raise TemplateRegistrationError(
                f"Template {self.name!r} strategy must be a FixStrategy, "
                f"got {type(self.strategy).__name__}",
            )
        if isinstance(self.confidence, bool) or not 0.0 <= self.confidence <= 1.0:
            raise TemplateRegistrationError(
                f"Template {self.name!r} confidence must be within [0, 1], "
                f"got {self.confidence!r}",
            )

    @classmethod
    def create(
        cls,
        name: str,
        error_type: ErrorType,
        pattern: str,
        strategy: FixStrategy,
        *,
        confidence: float,
        auto_fixable: bool,
    ) -> FixTemplate:
        """Build a template from a pattern string.

        Args:
            name: Template name.
            error_type: Bucket the template belongs to.
            pattern: Regex source, compiled case-insensitively.
            strategy: Strategy to run on a match.
            confidence: Static confidence in [0, 1].
            auto_fixable: Static auto-fixable flag.

        Returns:
            FixTemplate: The compiled template.

        Raises:
            TemplateRegistrationError: If the pattern does not compile or
                any field is invalid.
        """
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise TemplateRegistrationError(
                f"Template {name!r} has an invalid pattern: {e}",
            ) from e
        return cls(
            name=name,
            error_type=error_type,
            pattern=compiled,
            strategy=strategy,
            confidence=confidence,
            auto_fixable=auto_fixable,
        )

    @property
    def qualified_name(self) -> str:
        """Return ``"<error_type>.<name>"``."""
        return f"{self.error_type}.{self.name}"

    def matches(self, message: str) -> bool:
        """Return True when the error message matches this template."""
        return self.pattern.search(message or "") is not None
