"""Timeout and retry layer for AI model calls.

Every attempt is raced against a fixed timeout. Failed attempts are
retried with a linearly growing delay: retry ``n`` (1-based) waits
``n * base_delay`` seconds, so the default three retries wait 1s, 2s and
3s. Authentication failures are permanent and never retried.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from remedy.ai.exceptions import (
    AIAuthenticationError,
    AIError,
    AIProviderError,
    AITimeoutError,
)

T = TypeVar("T")

# Defaults
DEFAULT_MAX_RETRIES = 3
DEFAULT_TIMEOUT = 30.0
DEFAULT_BASE_DELAY = 1.0


def backoff_delay(retry_count: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Return the wait before the retry following attempt ``retry_count``.

    Args:
        retry_count: 0-based index of the attempt that just failed.
        base_delay: Delay unit in seconds.

    Returns:
        float: Seconds to wait.
    """
    return base_delay * (retry_count + 1)


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def _attempt(call: Callable[[], Awaitable[T]], timeout: float) -> T:
    """Run one attempt, normalizing timeouts and foreign exceptions."""
    try:
        return await asyncio.wait_for(call(), timeout=timeout)
    except TimeoutError as e:
        raise AITimeoutError(f"Model call timed out after {timeout:g}s") from e
    except AIError:
        raise
    except Exception as e:
        raise AIProviderError(f"Model call failed: {e}") from e


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    timeout: float = DEFAULT_TIMEOUT,
    base_delay: float = DEFAULT_BASE_DELAY,
) -> T:
    """Await ``call()`` with a per-attempt timeout and bounded retries.

    ``call`` is invoked afresh for each attempt. At most
    ``max_retries + 1`` attempts are made.

    Args:
        call: Zero-argument callable returning a new awaitable per attempt.
        max_retries: Retries after the first failed attempt.
        timeout: Seconds allowed per attempt.
        base_delay: Delay unit for the linear backoff.

    Returns:
        T: The first successful result.

    Raises:
        AIAuthenticationError: Immediately, without retrying.
        AIProviderError: The last failure once retries are exhausted.
            Timeouts surface as ``AITimeoutError``.
    """
    retry_count = 0
    while True:
        try:
            return await _attempt(call, timeout)
        except AIAuthenticationError:
            raise
        except AIProviderError as e:
            if retry_count >= max_retries:
                logger.debug(f"AI call failed after {retry_count + 1} attempts: {e}")
                raise
            delay = backoff_delay(retry_count, base_delay)
            logger.warning(
                f"AI call failed, retrying ({retry_count + 1}/{max_retries}) "
                f"in {delay:.1f}s: {e}",
            )
            await _sleep(delay)
            retry_count += 1


def with_retry(
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    timeout: float = DEFAULT_TIMEOUT,
    base_delay: float = DEFAULT_BASE_DELAY,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Decorator applying :func:`call_with_retry` to an async function.

    Args:
        max_retries: Retries after the first failed attempt.
        timeout: Seconds allowed per attempt.
        base_delay: Delay unit for the linear backoff.

    Returns:
        Decorated coroutine function with timeout and retry behavior.
    """

    def decorator(
        func: Callable[..., Awaitable[Any]],
    ) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await call_with_retry(
                lambda: func(*args, **kwargs),
                max_retries=max_retries,
                timeout=timeout,
                base_delay=base_delay,
            )

        return wrapper

    return decorator
