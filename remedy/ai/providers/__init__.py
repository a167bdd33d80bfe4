"""AI provider factory and registry.

Provides the ``get_provider()`` factory function that instantiates
the appropriate AI provider based on configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remedy.ai.config import AIConfig
    from remedy.ai.providers.base import BaseAIProvider

# Provider defaults, readable without importing the SDKs.
DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-6",
    "openai": "gpt-4o",
}

DEFAULT_API_KEY_ENVS: dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def get_provider(config: AIConfig) -> BaseAIProvider:
    """Instantiate an AI provider from configuration.

    Args:
        config: AI configuration specifying provider, model, and API key.

    Returns:
        BaseAIProvider: Configured provider instance.

    Raises:
        ValueError: If the provider name is not recognized.
    """
    provider_name = config.provider.lower()

    if provider_name == "anthropic":
        from remedy.ai.providers.anthropic import AnthropicProvider

        return AnthropicProvider(
            model=config.model,
            api_key_env=config.api_key_env,
            max_tokens=config.max_tokens,
        )
    if provider_name == "openai":
        from remedy.ai.providers.openai import OpenAIProvider

        return OpenAIProvider(
            model=config.model,
            api_key_env=config.api_key_env,
            max_tokens=config.max_tokens,
        )
    raise ValueError(
        f"Unknown AI provider: '{provider_name}'. "
        f"Supported providers: {', '.join(DEFAULT_MODELS)}",
    )


__all__ = ["DEFAULT_API_KEY_ENVS", "DEFAULT_MODELS", "get_provider"]
