"""Tests for OpenAI AI provider."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from assertpy import assert_that

from remedy.ai.exceptions import (
    AIAuthenticationError,
    AINotAvailableError,
    AIProviderError,
    AITokenLimitError,
)
from remedy.ai.providers import openai as mod
from remedy.ai.providers.openai import OpenAIProvider


def test_openai_provider_raises_when_sdk_missing():
    """Verify that OpenAIProvider raises AINotAvailableError when the SDK is missing."""
    with (
        patch.object(mod, "_has_openai", False),
        pytest.raises(AINotAvailableError),
    ):
        OpenAIProvider()


def test_openai_provider_default_model():
    """Verify that OpenAIProvider uses the expected default model and provider name."""
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider()

        assert_that(provider.model_name).is_equal_to("gpt-4o")
        assert_that(provider.name).is_equal_to("openai")


def test_openai_provider_is_available_with_no_key():
    """Verify that is_available returns False when no API key is set."""
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider(api_key_env="NONEXISTENT_KEY_VAR")

        with patch.dict("os.environ", {}, clear=True):
            assert_that(provider.is_available()).is_false()


def test_openai_provider_get_client_no_key_raises():
    """_get_client raises AIAuthenticationError when key missing."""
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider(api_key_env="NONEXISTENT_KEY")

        with (
            patch.dict("os.environ", {}, clear=True),
            pytest.raises(AIAuthenticationError),
        ):
            provider._get_client()


def _completion(content, *, usage=True):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=(
            SimpleNamespace(prompt_tokens=90, completion_tokens=20) if usage else None
        ),
    )


def test_openai_provider_complete_sends_system_message():
    """complete() prepends the system prompt and maps usage."""
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("{}")
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider()
        provider._client = client

        response = provider.complete("prompt", system="sys")

    messages = client.chat.completions.create.call_args.kwargs["messages"]
    assert_that(messages).is_equal_to(
        [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "prompt"},
        ],
    )
    assert_that(response.content).is_equal_to("{}")
    assert_that(response.input_tokens).is_equal_to(90)
    assert_that(response.output_tokens).is_equal_to(20)


def test_openai_provider_complete_without_usage():
    """Missing usage counts as zero tokens."""
    client = MagicMock()
    client.chat.completions.create.return_value = _completion(None, usage=False)
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider()
        provider._client = client

        response = provider.complete("prompt")

    assert_that(response.content).is_equal_to("")
    assert_that(response.input_tokens).is_equal_to(0)


def test_openai_provider_complete_no_choices_raises():
    """An empty choice list is a provider error."""
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(choices=[], usage=None)
    with patch.object(mod, "_has_openai", True):
        provider = OpenAIProvider()
        provider._client = client

        with pytest.raises(AIProviderError, match="no choices"):
            provider.complete("prompt")


def _fake_sdk():
    class OpenAIError(Exception):
        pass

    class AuthenticationError(OpenAIError):
        pass

    class RateLimitError(OpenAIError):
        pass

    class APITimeoutError(OpenAIError):
        pass

    class BadRequestError(OpenAIError):
        def __init__(self, message, code=None):
            super().__init__(message)
            self.code = code

    return SimpleNamespace(
        OpenAI=MagicMock(),
        OpenAIError=OpenAIError,
        AuthenticationError=AuthenticationError,
        RateLimitError=RateLimitError,
        APITimeoutError=APITimeoutError,
        BadRequestError=BadRequestError,
    )


def test_openai_provider_get_client_checks_key_before_sdk():
    """A missing key fails before any client is constructed."""
    sdk = _fake_sdk()
    with (
        patch.object(mod, "_has_openai", True),
        patch.object(mod, "openai", sdk, create=True),
    ):
        provider = OpenAIProvider(api_key_env="NONEXISTENT_KEY")

        with (
            patch.dict("os.environ", {}, clear=True),
            pytest.raises(AIAuthenticationError),
        ):
            provider._get_client()

    sdk.OpenAI.assert_not_called()


def test_openai_provider_maps_context_length_code_to_token_limit():
    """The context_length_exceeded error code raises AITokenLimitError."""
    sdk = _fake_sdk()
    client = MagicMock()
    client.chat.completions.create.side_effect = sdk.BadRequestError(
        "This model's maximum context length is 128000 tokens.",
        code="context_length_exceeded",
    )
    with (
        patch.object(mod, "_has_openai", True),
        patch.object(mod, "openai", sdk, create=True),
    ):
        provider = OpenAIProvider()
        provider._client = client

        with pytest.raises(AITokenLimitError, match="token limit"):
            provider.complete("prompt")


def test_openai_provider_other_bad_request_is_provider_error():
    """Other bad requests stay generic provider errors."""
    sdk = _fake_sdk()
    client = MagicMock()
    client.chat.completions.create.side_effect = sdk.BadRequestError(
        "Invalid value for 'temperature'",
        code="invalid_value",
    )
    with (
        patch.object(mod, "_has_openai", True),
        patch.object(mod, "openai", sdk, create=True),
    ):
        provider = OpenAIProvider()
        provider._client = client

        with pytest.raises(AIProviderError) as exc_info:
            provider.complete("prompt")

    assert_that(isinstance(exc_info.value, AITokenLimitError)).is_false()
