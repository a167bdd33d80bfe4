"""Module resolution strategies."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from remedy.enums.change_type import ChangeType
from remedy.fixes.templates.base import FixStrategy
from remedy.fixes.templates.text import join_lines, split_lines
from remedy.models.change import Change
from remedy.models.outcomes import DeterministicFixOutcome

if TYPE_CHECKING:
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext

_MODULE_RE = re.compile(r"cannot find module ['\"](.+?)['\"]", re.IGNORECASE)


class MissingExtensionStrategy(FixStrategy):
    """Add a file extension to a relative import that fails to resolve.

    Only relative specifiers (``./`` or ``../``) are considered, and only
    when a file with one of the candidate extensions exists next to the
    importing file.
    """

    def __init__(self, extensions: Sequence[str] = (".js",)) -> None:
        """Initialize the strategy.

        Args:
            extensions: Extensions tried in order.
        """
        self.extensions = tuple(extensions)

    def attempt(
        self,
        error: ClassifiedError,
        content: str,
        context: FixContext | None = None,
    ) -> DeterministicFixOutcome:
        """Rewrite every quoted occurrence of the specifier.

        Args:
            error: Diagnostic naming the unresolved module.
            content: Current file content.
            context: Used for the file path when the error has none.

        Returns:
            DeterministicFixOutcome: One ``modify`` change per rewritten
                line on success.
        """
        match = _MODULE_RE.search(error.message or "")
        if not match:
            return DeterministicFixOutcome.declined("Could not extract module name")

        module = match.group(1)
        source_file = error.file or (context.file_path if context else "")
        if not module.startswith(("./", "../")) or not source_file:
            return DeterministicFixOutcome.declined(
                "Cannot automatically resolve module path",
            )

        base = Path(source_file).parent
        extension = next(
            (ext for ext in self.extensions if (base / f"{module}{ext}").is_file()),
            None,
        )
        if extension is None:
            logger.debug(f"No candidate file found for {module!r} under {base}")
            return DeterministicFixOutcome.declined(
                "Cannot automatically resolve module path",
            )

        quoted = re.compile(rf"['\"]{re.escape(module)}['\"]")
        replacement = f"'{module}{extension}'"
        lines = split_lines(content)
        changes: list[Change] = []
        for i, line in enumerate(lines):
            new_line = quoted.sub(replacement, line)
            if new_line != line:
                lines[i] = new_line
                changes.append(
                    Change(
                        type=ChangeType.MODIFY,
                        line=i + 1,
                        old_code=line,
                        new_code=new_line,
                        description=f"Changed '{module}' to '{module}{extension}'",
                    ),
                )

        if not changes:
            return DeterministicFixOutcome.declined(
                f"Could not locate import of '{module}'",
            )

        return DeterministicFixOutcome.succeeded(
            fix=join_lines(lines),
            description=f"Added {extension} extension to import",
            changes=changes,
        )
