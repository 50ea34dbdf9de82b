"""
Per-user sliding-window quota for summarization requests.
"""

import threading
import time
from collections import defaultdict
from typing import Callable


class SlidingWindowRateLimiter:
    """In-memory request quota keyed by user.

    Each recorded request stores one timestamp per unit of cost; timestamps
    older than the window are discarded lazily.
    """

    def __init__(
        self,
        max_requests: int = 20,
        window_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Allowed cost per user per window
            window_seconds: Window length in seconds
            clock: Monotonic time source
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def _prune(self, user_id: str, now: float) -> list[float]:
        cutoff = now - self.window_seconds
        valid = [t for t in self._requests.get(user_id, []) if t > cutoff]
        if valid:
            self._requests[user_id] = valid
        else:
            self._requests.pop(user_id, None)
        return valid

    def check(self, user_id: str, cost: int = 1) -> bool:
        """Whether ``cost`` more requests fit in the user's current window."""
        with self._lock:
            valid = self._prune(user_id, self._clock())
            return len(valid) + cost <= self.max_requests

    def record(self, user_id: str, cost: int = 1) -> None:
        """Count ``cost`` requests for the user at the current time."""
        with self._lock:
            now = self._clock()
            valid = self._prune(user_id, now)
            valid.extend([now] * cost)
            self._requests[user_id] = valid

    def remaining(self, user_id: str) -> int:
        with self._lock:
            valid = self._prune(user_id, self._clock())
            return max(0, self.max_requests - len(valid))

    def usage(self) -> dict:
        """Active users and requests inside their windows."""
        with self._lock:
            now = self._clock()
            for user_id in list(self._requests):
                self._prune(user_id, now)
            return {
                "active_users": len(self._requests),
                "total_active_requests": sum(len(v) for v in self._requests.values()),
            }
