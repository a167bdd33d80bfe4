"""Abstract base class for AI providers.

A provider is the opaque model boundary: it accepts a text prompt and
returns text. Timeouts, retries and response validation are layered on
top by the caller.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from remedy.ai.exceptions import AIAuthenticationError


@dataclass(frozen=True)
class AIResponse:
    """Response from an AI provider call.

    Attributes:
        content: The generated text content.
        model: Model identifier that produced this response.
        input_tokens: Number of input tokens consumed.
        output_tokens: Number of output tokens generated.
        cost_estimate: Estimated cost in USD for this call.
        provider: Name of the provider (e.g., "anthropic", "openai").
    """

    content: str
    model: str
    input_tokens: int = field(default=0)
    output_tokens: int = field(default=0)
    cost_estimate: float = field(default=0.0)
    provider: str = field(default="")


class BaseAIProvider(ABC):
    """Abstract base class for AI providers.

    Implementations are synchronous and blocking. The fix generator runs
    them in a worker thread so that many requests can be in flight at
    once and a timed-out call can be abandoned.
    """

    @abstractmethod
    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
        timeout: float = 30.0,
    ) -> AIResponse:
        """Generate a completion from the AI model.

        Args:
            prompt: The user prompt to send to the model.
            system: Optional system prompt to set context.
            max_tokens: Maximum number of tokens to generate.
            timeout: Request timeout in seconds, passed to the SDK.

        Returns:
            AIResponse: The model's response with usage metadata.

        Raises:
            AIProviderError: If the API call fails.
            AIAuthenticationError: If authentication fails.
            AIRateLimitError: If rate limited.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the SDK is installed and an API key is configured."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider identifier (e.g. "anthropic")."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the configured model identifier."""
        ...


def read_api_key(env_var: str) -> str:
    """Read an API key from the environment.

    Args:
        env_var: Name of the environment variable.

    Returns:
        str: The API key.

    Raises:
        AIAuthenticationError: If the variable is unset or empty.
    """
    api_key = os.environ.get(env_var)
    if not api_key:
        raise AIAuthenticationError(
            f"No API key found. Set the {env_var} environment variable.",
        )
    return api_key


# Substrings SDKs use when a request does not fit the model's context.
TOKEN_LIMIT_MARKERS: tuple[str, ...] = (
    "context_length_exceeded",
    "context length",
    "context window",
    "prompt is too long",
    "maximum context",
    "too many tokens",
)


def exceeds_token_limit(error: Exception) -> bool:
    """Return True if an SDK error reports an oversized request.

    Args:
        error: Exception raised by the provider SDK.

    Returns:
        bool: True when the message or error code names a token limit.
    """
    text = f"{getattr(error, 'code', '') or ''} {error}".lower()
    return any(marker in text for marker in TOKEN_LIMIT_MARKERS)
