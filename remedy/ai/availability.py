"""Graceful degradation for AI dependencies.

Checks whether the required AI provider packages are installed and
provides clear error messages when they are not.
"""

from __future__ import annotations

import importlib.util

import click

_PROVIDER_PACKAGES: dict[str, str] = {
    "anthropic": "anthropic",
    "openai": "openai",
}


def is_provider_available(provider: str) -> bool:
    """Check if a specific provider package is installed.

    Args:
        provider: Provider name ("anthropic" or "openai").

    Returns:
        bool: True if the provider's package is importable.
    """
    package = _PROVIDER_PACKAGES.get(provider)
    if package is None:
        return False
    return importlib.util.find_spec(package) is not None


def is_ai_available() -> bool:
    """Check if at least one AI provider package is installed.

    Returns:
        bool: True if anthropic or openai is importable.
    """
    return any(is_provider_available(name) for name in _PROVIDER_PACKAGES)


def require_ai(provider: str | None = None) -> None:
    """Ensure AI dependencies are installed.

    Args:
        provider: Specific provider to check, or None for any provider.

    Raises:
        click.UsageError: If the required packages are not installed,
            with installation instructions.
    """
    available = is_provider_available(provider) if provider else is_ai_available()
    if not available:
        target = f"the '{provider}' package" if provider else "remedy[ai]"
        raise click.UsageError(
            f"AI fixes require {target}. Install with: pip install 'remedy[ai]'",
        )
