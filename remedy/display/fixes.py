"""Fix result rendering for the terminal."""

from __future__ import annotations

import io
from collections.abc import Iterable

from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from remedy.ai.cost import format_cost
from remedy.fixes.templates.base import FixTemplate
from remedy.models.change import Change
from remedy.models.classified_error import ClassifiedError
from remedy.models.outcomes import FixResult

BORDER_LENGTH = 80


def _make_console() -> tuple[io.StringIO, Console]:
    buf = io.StringIO()
    console = Console(
        file=buf,
        force_terminal=True,
        highlight=False,
        width=BORDER_LENGTH,
    )
    return buf, console


def _describe_change(change: Change) -> str:
    span = change.line_span()
    if span is None:
        loc = ""
    elif span[0] == span[1]:
        loc = f"line {span[0]}"
    else:
        loc = f"lines {span[0]}-{span[1]}"
    detail = change.description or change.text or change.new_code or ""
    detail = detail.splitlines()[0] if detail else ""
    parts = [p for p in (str(change.type), loc, detail) if p]
    return " · ".join(escape(p) for p in parts)


def render_fix_result(
    error: ClassifiedError,
    result: FixResult,
    *,
    show_fix: bool = False,
    show_cost: bool = True,
) -> str:
    """Render a single fix result as a Rich panel.

    Args:
        error: The diagnostic the result is for.
        result: Result returned by the fix generator.
        show_fix: Whether to include the fixed text in the panel.
        show_cost: Whether to show token usage and cost for AI results.

    Returns:
        Formatted string for terminal display.
    """
    buf, console = _make_console()

    parts: list[RenderableType] = [
        f"[dim]{escape(error.location() or '<unknown>')}[/dim]  "
        f"{escape(error.message)}",
    ]

    if result.success:
        method = result.method or "template"
        parts.append(
            f"[green]Fixed[/green] via [bold]{escape(method)}[/bold] "
            f"[dim](confidence {result.confidence:.2f})[/dim]",
        )
        summary = result.description or result.explanation
        if summary:
            parts.append(f"[cyan]{escape(summary)}[/cyan]")
    else:
        parts.append(f"[red]Not fixed:[/red] {escape(result.reason or 'unknown')}")
        if result.suggestion:
            parts.append(f"[yellow]Suggestion:[/yellow] {escape(result.suggestion)}")
        for hint in result.suggestions:
            parts.append(f"[dim]Hint:[/dim] {escape(hint.description)}")

    for change in result.changes:
        parts.append(f"  [dim]-[/dim] {_describe_change(change)}")

    for warning in result.warnings:
        parts.append(f"[yellow]Warning:[/yellow] {escape(warning)}")

    metadata = result.metadata
    if show_cost and metadata is not None and metadata.cost_estimate > 0:
        tokens = metadata.input_tokens + metadata.output_tokens
        parts.append(
            f"[dim]{escape(metadata.model)}  {tokens} tokens, "
            f"est. {format_cost(metadata.cost_estimate)}[/dim]",
        )

    if show_fix and result.fix:
        parts.append(
            Panel(
                escape(result.fix),
                border_style="dim",
                padding=(0, 1),
            ),
        )

    title_type = result.fix_type or str(error.type)
    border = "green" if result.success else "red"
    if result.success and not result.auto_fixable:
        border = "yellow"
    console.print(
        Panel(
            Group(*parts),
            title=f"[bold]{escape(title_type)}[/bold]",
            title_align="left",
            border_style=border,
            padding=(0, 1),
        ),
    )
    return buf.getvalue()


def render_fix_types(templates: Iterable[FixTemplate]) -> str:
    """Render the template catalog as a table.

    Args:
        templates: Templates in registration order.

    Returns:
        Formatted string for terminal display.
    """
    buf, console = _make_console()
    table = Table(title="Fix templates", title_justify="left")
    table.add_column("Type", style="cyan")
    table.add_column("Template", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Auto-fixable", justify="center")
    for template in templates:
        table.add_row(
            str(template.error_type),
            template.name,
            f"{template.confidence:.2f}",
            "yes" if template.auto_fixable else "no",
        )
    console.print(table)
    return buf.getvalue()
