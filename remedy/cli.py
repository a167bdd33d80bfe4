"""Click CLI entry point for remedy."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click
from loguru import logger

from remedy import __version__
from remedy.ai.availability import require_ai
from remedy.ai.config import AIConfig
from remedy.ai.fix import AIFixGenerator
from remedy.ai.providers import get_provider
from remedy.display.fixes import render_fix_result, render_fix_types
from remedy.enums.error_type import ErrorType
from remedy.enums.severity_level import SeverityLevel
from remedy.fixes.generator import METHOD_TEMPLATE, FixGenerator
from remedy.models.classified_error import ClassifiedError
from remedy.models.context import FixContext


@click.group()
@click.version_option(version=__version__, prog_name="remedy")
@click.option("--debug", is_flag=True, help="Show debug logging.")
def cli(debug: bool) -> None:
    """Remedy - template and AI-assisted fixes for compiler and linter errors."""
    logger.remove()
    if debug:
        logger.add(click.get_text_stream("stderr"), level="DEBUG")


@cli.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--line", "-l", type=int, required=True, help="1-based error line.")
@click.option(
    "--type",
    "-t",
    "error_type",
    type=click.Choice([t.value for t in ErrorType], case_sensitive=False),
    required=True,
    help="Error category.",
)
@click.option("--message", "-m", required=True, help="Diagnostic message.")
@click.option(
    "--severity",
    type=click.Choice([s.value for s in SeverityLevel], case_sensitive=False),
    default=SeverityLevel.MEDIUM.value,
    show_default=True,
    help="Diagnostic severity.",
)
@click.option("--ai/--no-ai", default=False, help="Fall back to an AI provider.")
@click.option(
    "--provider",
    type=click.Choice(["anthropic", "openai"]),
    default="anthropic",
    show_default=True,
    help="AI provider for the fallback.",
)
@click.option("--model", default=None, help="Model identifier for the AI provider.")
@click.option("--apply", is_flag=True, help="Write a template fix back to FILE.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def fix(
    file: Path,
    line: int,
    error_type: str,
    message: str,
    severity: str,
    ai: bool,
    provider: str,
    model: str | None,
    apply: bool,
    as_json: bool,
) -> None:
    """Propose a fix for one diagnostic in FILE."""
    try:
        content = file.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise click.ClickException(
            f"Cannot read {file}: not valid UTF-8 ({e.reason})",
        ) from e
    error = ClassifiedError(
        type=error_type,
        message=message,
        file=str(file),
        line=line,
        severity=severity,
    )

    ai_generator = None
    if ai:
        require_ai(provider)
        config = AIConfig(enabled=True, provider=provider, model=model)
        ai_generator = AIFixGenerator(get_provider(config), config)

    generator = FixGenerator(ai_generator=ai_generator)
    context = FixContext(file_path=str(file), file_content=content)
    result = asyncio.run(generator.generate_fix(error, content, context))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(render_fix_result(error, result, show_fix=not apply), nl=False)

    if apply:
        # AI fixes are code snippets, not whole files
        if result.success and result.method == METHOD_TEMPLATE and result.fix is not None:
            file.write_bytes(result.fix.encode("utf-8"))
            if not as_json:
                click.echo(f"Applied {result.fix_type} fix to {file}")
        elif not as_json:
            click.echo("Nothing applied.")

    if not result.success:
        click.get_current_context().exit(1)


@cli.command("types")
def list_types() -> None:
    """List the registered fix templates."""
    generator = FixGenerator()
    click.echo(render_fix_types(generator.registry), nl=False)


def main() -> None:
    """Run the remedy CLI."""
    cli()


if __name__ == "__main__":
    main()
