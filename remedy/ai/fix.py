"""AI fix generation service.

Asks the configured provider for a fix when no deterministic template
could produce one. The blocking provider call runs in a worker thread,
raced against the configured timeout and retried with linear backoff.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from loguru import logger

from remedy.ai.config import AIConfig
from remedy.ai.exceptions import AIError
from remedy.ai.parser import parse_fix_response
from remedy.ai.prompts import FIX_SYSTEM, build_fix_prompt
from remedy.ai.retry import with_retry
from remedy.models.outcomes import AIFixOutcome

if TYPE_CHECKING:
    from remedy.ai.providers.base import AIResponse, BaseAIProvider
    from remedy.models.classified_error import ClassifiedError
    from remedy.models.context import FixContext


class AIFixGenerator:
    """Generate fixes for classified errors through an AI provider."""

    def __init__(
        self,
        provider: BaseAIProvider,
        config: AIConfig | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            provider: Provider used for model calls.
            config: AI configuration. Defaults to ``AIConfig()``.
        """
        self.provider = provider
        self.config = config or AIConfig()

    async def _complete(self, prompt: str) -> AIResponse:
        return await asyncio.to_thread(
            self.provider.complete,
            prompt,
            system=FIX_SYSTEM,
            max_tokens=self.config.max_tokens,
            timeout=self.config.api_timeout,
        )

    async def generate_fix(
        self,
        error: ClassifiedError,
        context: FixContext,
    ) -> AIFixOutcome:
        """Ask the model for a fix and validate its response.

        Never raises: provider failures that survive the retry budget and
        unparseable responses both come back as failed outcomes.

        Args:
            error: The diagnostic to fix.
            context: File content and project metadata for the prompt.

        Returns:
            AIFixOutcome: Parsed fix, or a failed outcome with a reason.
        """
        prompt = build_fix_prompt(
            error,
            context,
            max_related_files=self.config.max_related_files,
            max_dependencies=self.config.max_dependencies,
        )
        logger.debug(
            f"Requesting AI fix for {error.location()} "
            f"({self.provider.name}, {len(prompt)} prompt chars)",
        )

        retrying_complete = with_retry(
            max_retries=self.config.max_retries,
            timeout=self.config.api_timeout,
            base_delay=self.config.retry_base_delay,
        )(self._complete)

        try:
            response = await retrying_complete(prompt)
        except AIError as e:
            logger.debug(f"AI fix generation failed for {error.location()}: {e}")
            return AIFixOutcome.failed(f"AI fix generation failed: {e}")

        return parse_fix_response(
            response.content,
            error,
            model=response.model or self.provider.model_name,
            provider=response.provider or self.provider.name,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            cost_estimate=response.cost_estimate,
        )
