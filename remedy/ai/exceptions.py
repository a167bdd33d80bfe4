"""AI-specific exception hierarchy for remedy.

All exceptions inherit from RemedyError. None of them escape the fix
generator: ``AIFixGenerator`` turns them into failed outcomes.
"""

from __future__ import annotations

from remedy.exceptions.errors import RemedyError


class AIError(RemedyError):
    """Base exception for all AI-related errors."""


class AINotAvailableError(AIError):
    """AI dependencies are not installed.

    Raised when a provider is requested but its SDK (anthropic, openai)
    cannot be imported. The message includes installation instructions.
    """


class AIProviderError(AIError):
    """Error communicating with an AI provider.

    Raised for network errors, server errors, or unexpected response
    shapes. Retried by the retry layer.
    """


class AIAuthenticationError(AIProviderError):
    """API key is invalid or missing.

    Permanent failure: never retried.
    """


class AIRateLimitError(AIProviderError):
    """Rate limit exceeded on the AI provider."""


class AITimeoutError(AIProviderError):
    """A model call did not finish within the configured timeout.

    The underlying call is abandoned, not cancelled; it may still
    complete on the provider's side.
    """


class AITokenLimitError(AIError):
    """Request exceeds the model's token limit."""


class AIResponseError(AIError):
    """The model's response could not be parsed or validated."""
