"""Retry utilities for handling transient failures.

Provides a helper for retrying async operations with exponential
backoff. Used by the Anthropic client to ride out network failures and
non-success HTTP responses.

Key Exports:
    retry_async: Await a coroutine factory with bounded retries.

Example:
    >>> from issue_analyzer.utils.retry import retry_async
    >>>
    >>> text = await retry_async(
    ...     lambda: client.fetch(prompt),
    ...     max_attempts=3,
    ...     backoff_factor=2.0,
    ... )

Backoff Formula:
    delay = backoff_factor ** attempt_number
    For backoff_factor=2.0: 2s after attempt 1, 4s after attempt 2, ...

Attempts are strictly sequential and there is no jitter. A max_attempts
below 1 still makes a single attempt.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    backoff_factor: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    name: str | None = None,
) -> T:
    """Await ``operation()`` until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable returning a fresh awaitable for
            each attempt.
        max_attempts: Maximum number of attempts. Values below 1 are treated
            as 1.
        backoff_factor: Base for the exponential delay. The delay after
            attempt N is backoff_factor^N seconds.
        exceptions: Exception types that trigger a retry. Anything else
            propagates immediately.
        name: Operation name used in log events.

    Returns:
        The result of the first successful attempt.

    Raises:
        The last caught exception once all attempts are exhausted.
    """
    attempts = max(max_attempts, 1)
    name = name or getattr(operation, "__name__", "operation")

    attempt = 1
    while True:
        try:
            return await operation()
        except exceptions as e:
            if attempt >= attempts:
                log.error(
                    "retry_exhausted",
                    function=name,
                    attempts=attempt,
                    error=str(e),
                )
                raise

            delay = backoff_factor**attempt
            log.warning(
                "retry_attempt",
                function=name,
                attempt=attempt,
                max_attempts=attempts,
                delay=delay,
                error=str(e),
            )
            await asyncio.sleep(delay)
            attempt += 1
