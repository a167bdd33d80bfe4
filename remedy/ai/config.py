"""AI configuration model for remedy.

All AI features are opt-in and disabled by default. Defaults match the
fix generator's documented behaviour: a 30 second timeout per call and
up to three retries with linearly growing delays.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AIConfig(BaseModel):
    """Configuration for AI-assisted fix generation.

    Attributes:
        model_config: Pydantic model configuration for mutability and
            extra-field handling.
        enabled: Whether the AI fallback is used at all.
        provider: AI provider to use ("anthropic" or "openai").
        model: Model identifier. None uses the provider's default.
        api_key_env: Custom environment variable name for the API key.
            Defaults to the provider-specific variable.
        max_tokens: Maximum tokens per AI request.
        max_retries: Retries after the first failed attempt. 0 disables
            retries.
        api_timeout: Timeout in seconds for each model call.
        retry_base_delay: Delay unit in seconds; retry ``n`` (1-based)
            waits ``n * retry_base_delay``.
        max_related_files: Related files included verbatim in the prompt.
        max_dependencies: Dependency names listed in the prompt.
        max_parallel_calls: Maximum concurrent fix requests in a batch.
    """

    model_config = ConfigDict(frozen=False, extra="forbid")

    enabled: bool = False
    provider: Literal["anthropic", "openai"] = "anthropic"
    model: str | None = None
    api_key_env: str | None = None
    max_tokens: int = Field(default=2000, ge=1)
    max_retries: int = Field(default=3, ge=0, le=10)
    api_timeout: float = Field(default=30.0, gt=0.0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    max_related_files: int = Field(default=3, ge=0, le=20)
    max_dependencies: int = Field(default=10, ge=0, le=100)
    max_parallel_calls: int = Field(default=5, ge=1, le=20)
