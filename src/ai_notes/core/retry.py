"""
Retry policy with exponential backoff for async provider calls.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ai_notes.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff schedule.

    Attempt 1 runs immediately; the delay before attempt ``n + 1`` is
    ``min(base_delay_ms * 2 ** (n - 1), max_delay_ms)``.
    """

    max_attempts: int = 2
    base_delay_ms: int = 1000
    max_delay_ms: int = 10_000

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("Backoff delays cannot be negative")

    def delay_for(self, attempt: int) -> int:
        """Return the delay in milliseconds after a failed ``attempt`` (1-indexed)."""
        if attempt < 1:
            return 0
        return min(self.base_delay_ms * 2 ** (attempt - 1), self.max_delay_ms)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_retry: Optional[Callable[[int, Exception, int], None]] = None,
) -> T:
    """Run ``operation`` until it succeeds or the attempt budget is spent.

    Args:
        operation: Zero-argument coroutine factory
        policy: Retry policy
        sleep: Coroutine used to wait between attempts (seconds)
        on_retry: Called with (attempt, error, delay_ms) before each wait

    Returns:
        The operation's result

    Raises:
        Exception: The last error raised by ``operation``
    """
    last_error: Optional[Exception] = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e

            if attempt == policy.max_attempts:
                break

            delay_ms = policy.delay_for(attempt)
            if on_retry:
                on_retry(attempt, e, delay_ms)
            else:
                logger.warning(f"Attempt {attempt} failed, retrying in {delay_ms}ms: {e}")
            await sleep(delay_ms / 1000)

    raise last_error
