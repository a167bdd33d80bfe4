"""OpenAI provider using the ``openai`` SDK.

Requires the ``openai`` package (installed via ``remedy[ai]``).
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

_has_openai = False
try:
    import openai

    _has_openai = True
except ImportError:
    pass

DEFAULT_MODEL = DEFAULT_MODELS["openai"]
DEFAULT_API_KEY_ENV = DEFAULT_API_KEY_ENVS["openai"]

FIX_TEMPERATURE = 0.3


class OpenAIProvider(BaseAIProvider):
    """OpenAI GPT provider."""

    def __init__(
        self,
        *,
        model: str | None = None,
        api_key_env: str | None = None,
        max_tokens: int = 2000,
    ) -> None:
        """Initialize the OpenAI provider.

        Args:
            model: Model identifier. Defaults to ``DEFAULT_MODEL``.
            api_key_env: Environment variable holding the API key.
            max_tokens: Upper bound applied to every call.

        Raises:
            AINotAvailableError: If the openai package is not installed.
        """
        if not _has_openai:
            raise AINotAvailableError(
                "OpenAI provider requires the 'openai' package. "
                "Install with: pip install 'remedy[ai]'",
            )

        self._model = model or DEFAULT_MODEL
        self._api_key_env = api_key_env or DEFAULT_API_KEY_ENV
        self._max_tokens = max_tokens
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = read_api_key(self._api_key_env)
            self._client = openai.OpenAI(api_key=api_key)
        return self._client

    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
        timeout: float = 30.0,
    ) -> AIResponse:
        """Generate a chat completion.

        Args:
            prompt: The user prompt.
            system: Optional system prompt.
            max_tokens: Maximum tokens to generate.
            timeout: Request timeout in seconds.

        Returns:
            AIResponse: The first choice's content with usage metadata.

        Raises:
            AIAuthenticationError: If authentication fails.
            AIRateLimitError: If rate limited.
            AITimeoutError: If the SDK reports a timeout.
            AITokenLimitError: If the request exceeds the context window.
            AIProviderError: For any other API failure.
        """
        client = self._get_client()
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=min(max_tokens, self._max_tokens),
                temperature=FIX_TEMPERATURE,
                timeout=timeout,
            )
        except openai.AuthenticationError as e:
            raise AIAuthenticationError(f"OpenAI authentication failed: {e}") from e
        except openai.RateLimitError as e:
            raise AIRateLimitError(f"OpenAI rate limit exceeded: {e}") from e
        except openai.APITimeoutError as e:
            raise AITimeoutError(f"OpenAI request timed out: {e}") from e
        except openai.BadRequestError as e:
            if exceeds_token_limit(e):
                raise AITokenLimitError(
                    f"OpenAI request exceeds the model's token limit: {e}",
                ) from e
            logger.debug(f"OpenAI API error: {e}")
            raise AIProviderError(f"OpenAI API error: {e}") from e
        except openai.OpenAIError as e:
            logger.debug(f"OpenAI API error: {e}")
            raise AIProviderError(f"OpenAI API error: {e}") from e

        if not response.choices:
            raise AIProviderError("OpenAI returned no choices")

        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0
        return AIResponse(
            content=response.choices[0].message.content or "",
            model=self._model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_estimate=estimate_cost(self._model, input_tokens, output_tokens),
            provider=self.name,
        )

    def is_available(self) -> bool:
        """Return True if the SDK is installed and an API key is set."""
        if not _has_openai:
            return False
        try:
            read_api_key(self._api_key_env)
        except AIAuthenticationError:
            return False
        return True

    @property
    def name(self) -> str:
        """Return "openai"."""
        return "openai"

    @property
    def model_name(self) -> str:
        """Return the configured model identifier."""
        return self._model
