"""Template catalog and error classification.

Templates are registered once, grouped by error type, and read-only after
the registry is frozen. ``classify()`` picks at most one template per
error: the highest static confidence among those whose pattern matches,
with the earliest registered template winning ties.
"""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger

from remedy.enums.error_type import ErrorType
from remedy.exceptions.errors import TemplateRegistrationError
from remedy.fixes.templates.base import FixStrategy, FixTemplate
from remedy.fixes.templates.imports import MissingExtensionStrategy
from remedy.fixes.templates.manual import CannotFindNameStrategy, DeclineStrategy
from remedy.fixes.templates.style import (
    ConsoleStatementStrategy,
    DebuggerStatementStrategy,
    TrailingWhitespaceStrategy,
)
from remedy.fixes.templates.syntax import (
    BracketBalanceStrategy,
    MissingTerminatorStrategy,
    UnexpectedTokenStrategy,
)
from remedy.fixes.templates.unused import (
    UnreachableCodeStrategy,
    UnusedImportStrategy,
    UnusedVariableStrategy,
)
from remedy.models.classified_error import ClassifiedError


class TemplateRegistry:
    """Ordered catalog of fix templates keyed by error type."""

    def __init__(self) -> None:
        """Initialize an empty, unfrozen registry."""
        self._buckets: dict[ErrorType, list[FixTemplate]] = {}
        self._frozen = False

    def register(self, template: FixTemplate) -> FixTemplate:
        """Add a template to the end of its bucket.

        Args:
            template: Template to register.

        Returns:
            FixTemplate: The registered template.

        Raises:
            TemplateRegistrationError: If the registry is frozen or the
                bucket already holds a template with the same name.
        """
        if self._frozen:
            raise TemplateRegistrationError(
                f"Cannot register {template.qualified_name}: registry is frozen",
            )
        bucket = self._buckets.setdefault(template.error_type, [])
        if any(existing.name == template.name for existing in bucket):
            raise TemplateRegistrationError(
                f"Duplicate fix template: {template.qualified_name}",
            )
        bucket.append(template)
        return template

    def add(
        self,
        error_type: ErrorType,
        name: str,
        pattern: str,
        strategy: FixStrategy,
        *,
        confidence: float,
        auto_fixable: bool,
    ) -> FixTemplate:
        """Build and register a template in one call.

        Args:
            error_type: Bucket for the template.
            name: Template name.
            pattern: Case-insensitive regex source.
            strategy: Strategy to run on a match.
            confidence: Static confidence in [0, 1].
            auto_fixable: Static auto-fixable flag.

        Returns:
            FixTemplate: The registered template.
        """
        return self.register(
            FixTemplate.create(
                name,
                error_type,
                pattern,
                strategy,
                confidence=confidence,
                auto_fixable=auto_fixable,
            ),
        )

    def freeze(self) -> TemplateRegistry:
        """Disallow further registration and return self."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Return True once :meth:`freeze` has been called."""
        return self._frozen

    def classify(self, error: ClassifiedError) -> FixTemplate | None:
        """Select the template that should handle ``error``.

        Only the error's own bucket is scanned.

        Args:
            error: Classified diagnostic.

        Returns:
            FixTemplate | None: Best matching template, or None if the
                bucket does not exist or no pattern matches.
        """
        error_type = error.error_type
        if error_type is None:
            return None

        best: FixTemplate | None = None
        for template in self._buckets.get(error_type, ()):
            if not template.matches(error.message):
                continue
            if best is None or template.confidence > best.confidence:
                best = template

        if best is not None:
            logger.debug(
                f"Classified {error.location()} as {best.qualified_name} "
                f"(confidence={best.confidence})",
            )
        return best

    def get(self, error_type: ErrorType, name: str) -> FixTemplate | None:
        """Look up a template by bucket and name."""
        for template in self._buckets.get(error_type, ()):
            if template.name == name:
                return template
        return None

    def is_auto_fixable(self, error: ClassifiedError) -> bool:
        """Return the auto-fixable flag of the template ``error`` classifies to."""
        template = self.classify(error)
        return template.auto_fixable if template is not None else False

    def available_fix_types(self) -> list[str]:
        """Return ``"<error_type>.<name>"`` for every template, in order."""
        return [template.qualified_name for template in self]

    def __iter__(self) -> Iterator[FixTemplate]:
        for bucket in self._buckets.values():
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


def build_default_registry() -> TemplateRegistry:
    """Build the frozen catalog of built-in templates.

    Returns:
        TemplateRegistry: Registry holding every built-in template.
    """
    registry = TemplateRegistry()

    # Syntax
    registry.add(
        ErrorType.SYNTAX,
        "missing_semicolon",
        r"missing semicolon",
        MissingTerminatorStrategy(";"),
        confidence=0.9,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.SYNTAX,
        "unexpected_token",
        r"unexpected token",
        UnexpectedTokenStrategy(),
        confidence=0.7,
        auto_fixable=False,
    )
    registry.add(
        ErrorType.SYNTAX,
        "missing_bracket",
        r"missing.*bracket|unclosed.*bracket",
        BracketBalanceStrategy(),
        confidence=0.8,
        auto_fixable=True,
    )

    # Type
    registry.add(
        ErrorType.TYPE,
        "cannot_find_name",
        r"cannot find name",
        CannotFindNameStrategy(),
        confidence=0.6,
        auto_fixable=False,
    )
    registry.add(
        ErrorType.TYPE,
        "property_not_exist",
        r"property.*does not exist",
        DeclineStrategy("Property access issues usually require manual type checking"),
        confidence=0.5,
        auto_fixable=False,
    )
    registry.add(
        ErrorType.TYPE,
        "type_not_assignable",
        r"type.*is not assignable",
        DeclineStrategy(
            "Type assignment issues require understanding of intended types",
        ),
        confidence=0.4,
        auto_fixable=False,
    )

    # Import
    registry.add(
        ErrorType.IMPORT,
        "cannot_find_module",
        r"cannot find module",
        MissingExtensionStrategy(),
        confidence=0.8,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.IMPORT,
        "missing_import",
        r"missing import",
        DeclineStrategy(
            "Missing import detection requires understanding of available modules",
        ),
        confidence=0.7,
        auto_fixable=True,
    )

    # Unused code
    registry.add(
        ErrorType.UNUSED,
        "unused_variable",
        r"is defined but never used|is assigned a value but never used|unused variable",
        UnusedVariableStrategy(window=3),
        confidence=0.9,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.UNUSED,
        "unused_import",
        r"unused import|is imported but never used",
        UnusedImportStrategy(),
        confidence=0.9,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.UNUSED,
        "unreachable_code",
        r"unreachable code",
        UnreachableCodeStrategy(),
        confidence=0.8,
        auto_fixable=True,
    )

    # Scope
    registry.add(
        ErrorType.SCOPE,
        "not_defined",
        r"is not defined",
        DeclineStrategy("Undefined identifiers require scope analysis"),
        confidence=0.5,
        auto_fixable=False,
    )
    registry.add(
        ErrorType.SCOPE,
        "reference_error",
        r"reference error",
        DeclineStrategy("Reference errors require scope analysis"),
        confidence=0.4,
        auto_fixable=False,
    )

    # Style
    registry.add(
        ErrorType.STYLE,
        "missing_quotes",
        r"quotes|quotation",
        DeclineStrategy("Quote style fixes require project configuration"),
        confidence=0.9,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.STYLE,
        "indentation",
        r"indentation|indent",
        DeclineStrategy("Indentation fixes require style configuration"),
        confidence=0.8,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.STYLE,
        "trailing_spaces",
        r"trailing|whitespace",
        TrailingWhitespaceStrategy(),
        confidence=0.95,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.STYLE,
        "no_console",
        r"unexpected console|console statement",
        ConsoleStatementStrategy(),
        confidence=0.9,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.STYLE,
        "no_debugger",
        r"unexpected debugger",
        DebuggerStatementStrategy(),
        confidence=0.9,
        auto_fixable=True,
    )

    # React
    registry.add(
        ErrorType.REACT,
        "missing_key",
        r"missing key",
        DeclineStrategy("Missing key fixes require JSX AST parsing"),
        confidence=0.8,
        auto_fixable=True,
    )
    registry.add(
        ErrorType.REACT,
        "jsx_syntax",
        r"jsx",
        DeclineStrategy("JSX syntax errors usually require manual intervention"),
        confidence=0.6,
        auto_fixable=False,
    )

    return registry.freeze()
