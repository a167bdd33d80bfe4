"""Shared fixtures for AI tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from remedy.ai.config import AIConfig
from remedy.ai.providers.base import AIResponse, BaseAIProvider
from remedy.models.classified_error import ClassifiedError
from remedy.models.context import FixContext, ProjectInfo, RelatedFile


class MockAIProvider(BaseAIProvider):
    """Mock AI provider for testing.

    Queued items are returned in order; exceptions are raised instead of
    returned.
    """

    def __init__(
        self,
        responses: list[AIResponse | Exception] | None = None,
        *,
        available: bool = True,
    ) -> None:
        """Initialize the mock AI provider.

        Args:
            responses: Responses (or exceptions) for successive calls.
            available: Whether the provider reports as available.
        """
        self.responses: list[AIResponse | Exception] = responses or []
        self.calls: list[dict[str, Any]] = []
        self._available = available
        self._call_index = 0

    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
        timeout: float = 30.0,
    ) -> AIResponse:
        """Return the next queued response or a default."""
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "max_tokens": max_tokens,
                "timeout": timeout,
            },
        )
        if self._call_index < len(self.responses):
            response = self.responses[self._call_index]
            self._call_index += 1
            if isinstance(response, Exception):
                raise response
            return response
        return AIResponse(
            content="{}",
            model="mock-model",
            input_tokens=10,
            output_tokens=5,
            cost_estimate=0.001,
            provider="mock",
        )

    def is_available(self) -> bool:
        """Check if the mock AI provider is available."""
        return self._available

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    @property
    def model_name(self) -> str:
        """Return the model name."""
        return "mock-model"


def make_response(payload: dict[str, Any] | str, **kwargs: Any) -> AIResponse:
    """Build a mock response from a payload dict or raw text."""
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return AIResponse(
        content=content,
        model=kwargs.pop("model", "mock-model"),
        input_tokens=kwargs.pop("input_tokens", 120),
        output_tokens=kwargs.pop("output_tokens", 40),
        cost_estimate=kwargs.pop("cost_estimate", 0.002),
        provider=kwargs.pop("provider", "mock"),
    )


@pytest.fixture
def mock_provider() -> MockAIProvider:
    """Create a mock AI provider."""
    return MockAIProvider()


@pytest.fixture
def ai_config() -> AIConfig:
    """Create an enabled AI config with no backoff delay."""
    return AIConfig(enabled=True, provider="anthropic", retry_base_delay=0.0)


@pytest.fixture
def ai_config_disabled() -> AIConfig:
    """Create a disabled AI config for testing."""
    return AIConfig(enabled=False)


@pytest.fixture
def sample_error() -> ClassifiedError:
    """Create a type error that no template can fix."""
    return ClassifiedError(
        type="type",
        message="Type 'string' is not assignable to type 'number'.",
        file="src/app.ts",
        line=2,
        severity="error",
    )


@pytest.fixture
def sample_context() -> FixContext:
    """Create a context bundle with project metadata."""
    return FixContext(
        file_path="src/app.ts",
        file_content="const total: number = 0;\nconst label: number = 'x';\n",
        related_files=(
            RelatedFile(path="src/types.ts", content="export type Id = number;"),
        ),
        project_info=ProjectInfo(
            language="TypeScript",
            runtime_version="20.11.0",
            conventions="strict mode",
        ),
        framework="express",
        dependencies=("express", "zod"),
    )


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """Create a well-formed fix payload."""
    return {
        "fix": "const label: string = 'x';",
        "explanation": "The value is a string, so the annotation must be string.",
        "confidence": 0.85,
        "changes": [
            {
                "file": "src/app.ts",
                "type": "replace",
                "line": 2,
                "oldCode": "const label: number = 'x';",
                "newCode": "const label: string = 'x';",
            },
        ],
        "warnings": ["Callers expecting a number must be updated"],
    }
