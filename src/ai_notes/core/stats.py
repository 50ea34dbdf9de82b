"""
Request accounting for the summarizer.
"""

import threading
from dataclasses import dataclass


@dataclass
class StatsSnapshot:
    """Point-in-time copy of the summarizer counters."""

    request_count: int
    error_count: int
    current_provider: str

    @property
    def success_rate(self) -> float:
        """Percentage of requests whose primary provider succeeded."""
        if self.request_count == 0:
            return 0.0
        return round((self.request_count - self.error_count) / self.request_count * 100, 2)

    def to_dict(self) -> dict:
        return {
            "request_count": self.request_count,
            "error_count": self.error_count,
            "success_rate": self.success_rate,
            "current_provider": self.current_provider,
        }


class StatsCollector:
    """Mutex-guarded request and error counters.

    One collector is owned by each Summarizer, so separate instances never
    share counts.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._request_count = 0
        self._error_count = 0

    def record_request(self) -> int:
        """Increment the request counter and return the new value."""
        with self._lock:
            self._request_count += 1
            return self._request_count

    def record_error(self) -> int:
        """Increment the error counter and return the new value."""
        with self._lock:
            self._error_count += 1
            return self._error_count

    @property
    def request_count(self) -> int:
        return self._request_count

    @property
    def error_count(self) -> int:
        return self._error_count

    def snapshot(self, current_provider: str) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(
                request_count=self._request_count,
                error_count=self._error_count,
                current_provider=current_provider,
            )
