"""Anthropic provider using the ``anthropic`` SDK.

Requires the ``anthropic`` package (installed via ``remedy[ai]``).
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from remedy.ai.cost import estimate_cost
from remedy.ai.exceptions import (
    AIAuthenticationError,
    AINotAvailableError,
    AIProviderError,
    AIRateLimitError,
    AITimeoutError,
    AITokenLimitError,
)
from remedy.ai.providers import DEFAULT_API_KEY_ENVS, DEFAULT_MODELS
from remedy.ai.providers.base import (
    AIResponse,
    BaseAIProvider,
    exceeds_token_limit,
    read_api_key,
)

_has_anthropic = False
try:
    import anthropic

    _has_anthropic = True
except ImportError:
    pass

DEFAULT_MODEL = DEFAULT_MODELS["anthropic"]
DEFAULT_API_KEY_ENV = DEFAULT_API_KEY_ENVS["anthropic"]

# Low temperature keeps repeated fixes for the same error consistent.
FIX_TEMPERATURE = 0.3


class AnthropicProvider(BaseAIProvider):
    """Anthropic Claude provider."""

    def __init__(
        self,
        *,
        model: str | None = None,
        api_key_env: str | None = None,
        max_tokens: int = 2000,
    ) -> None:
        """Initialize the Anthropic provider.

        Args:
            model: Model identifier. Defaults to ``DEFAULT_MODEL``.
            api_key_env: Environment variable holding the API key.
            max_tokens: Upper bound applied to every call.

        Raises:
            AINotAvailableError: If the anthropic package is not installed.
        """
        if not _has_anthropic:
            raise AINotAvailableError(
                "Anthropic provider requires the 'anthropic' package. "
                "Install with: pip install 'remedy[ai]'",
            )

        self._model = model or DEFAULT_MODEL
        self._api_key_env = api_key_env or DEFAULT_API_KEY_ENV
        self._max_tokens = max_tokens
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = read_api_key(self._api_key_env)
            self._client = anthropic.Anthropic(api_key=api_key)
        return self._client

    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
        timeout: float = 30.0,
    ) -> AIResponse:
        """Generate a completion using Claude.

        Args:
            prompt: The user prompt.
            system: Optional system prompt.
            max_tokens: Maximum tokens to generate.
            timeout: Request timeout in seconds.

        Returns:
            AIResponse: The concatenated text blocks with usage metadata.

        Raises:
            AIAuthenticationError: If authentication fails.
            AIRateLimitError: If rate limited.
            AITimeoutError: If the SDK reports a timeout.
            AITokenLimitError: If the request exceeds the context window.
            AIProviderError: For any other API failure.
        """
        client = self._get_client()
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": min(max_tokens, self._max_tokens),
            "temperature": FIX_TEMPERATURE,
            "messages": [{"role": "user", "content": prompt}],
            "timeout": timeout,
        }
        if system:
            kwargs["system"] = system

        try:
            response = client.messages.create(**kwargs)
        except anthropic.AuthenticationError as e:
            raise AIAuthenticationError(f"Anthropic authentication failed: {e}") from e
        except anthropic.RateLimitError as e:
            raise AIRateLimitError(f"Anthropic rate limit exceeded: {e}") from e
        except anthropic.APITimeoutError as e:
            raise AITimeoutError(f"Anthropic request timed out: {e}") from e
        except anthropic.BadRequestError as e:
            if exceeds_token_limit(e):
                raise AITokenLimitError(
                    f"Anthropic request exceeds the model's token limit: {e}",
                ) from e
            logger.debug(f"Anthropic API error: {e}")
            raise AIProviderError(f"Anthropic API error: {e}") from e
        except anthropic.AnthropicError as e:
            logger.debug(f"Anthropic API error: {e}")
            raise AIProviderError(f"Anthropic API error: {e}") from e

        content = "".join(
            block.text for block in response.content if hasattr(block, "text")
        )
        input_tokens = response.usage.input_tokens
        output_tokens = response.usage.output_tokens
        return AIResponse(
            content=content,
            model=self._model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_estimate=estimate_cost(self._model, input_tokens, output_tokens),
            provider=self.name,
        )

    def is_available(self) -> bool:
        """Return True if the SDK is installed and an API key is set."""
        if not _has_anthropic:
            return False
        try:
            read_api_key(self._api_key_env)
        except AIAuthenticationError:
            return False
        return True

    @property
    def name(self) -> str:
        """Return "anthropic"."""
        return "anthropic"

    @property
    def model_name(self) -> str:
        """Return the configured model identifier."""
        return self._model
