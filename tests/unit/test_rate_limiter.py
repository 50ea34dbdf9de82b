"""Unit tests for the sliding-window rate limiter."""

import pytest

from ai_notes.web.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_requests=3, window_seconds=60, clock=clock)


class TestSlidingWindowRateLimiter:
    """Tests for SlidingWindowRateLimiter."""

    def test_allows_up_to_limit(self, limiter: SlidingWindowRateLimiter):
        """Test that requests are allowed until the limit is reached."""
        for _ in range(3):
            assert limiter.check("user-1")
            limiter.record("user-1")

        assert limiter.check("user-1") is False
        assert limiter.remaining("user-1") == 0

    def test_users_are_independent(self, limiter: SlidingWindowRateLimiter):
        """Test that each user has a separate quota."""
        limiter.record("user-1", cost=3)

        assert limiter.check("user-1") is False
        assert limiter.check("user-2") is True

    def test_window_expiry(self, limiter: SlidingWindowRateLimiter, clock: FakeClock):
        """Test that old requests leave the window."""
        limiter.record("user-1", cost=3)
        clock.advance(59)
        assert limiter.check("user-1") is False

        clock.advance(2)
        assert limiter.check("user-1") is True
        assert limiter.remaining("user-1") == 3

    def test_sliding_not_fixed(self, limiter: SlidingWindowRateLimiter, clock: FakeClock):
        """Test that requests expire individually."""
        limiter.record("user-1")
        clock.advance(30)
        limiter.record("user-1", cost=2)
        clock.advance(31)

        assert limiter.remaining("user-1") == 1

    def test_cost(self, limiter: SlidingWindowRateLimiter):
        """Test that multi-unit requests must fit entirely."""
        limiter.record("user-1")

        assert limiter.check("user-1", cost=2) is True
        assert limiter.check("user-1", cost=3) is False

    def test_usage(self, limiter: SlidingWindowRateLimiter, clock: FakeClock):
        """Test active user and request counts."""
        limiter.record("user-1", cost=2)
        limiter.record("user-2")

        assert limiter.usage() == {"active_users": 2, "total_active_requests": 3}

        clock.advance(61)
        assert limiter.usage() == {"active_users": 0, "total_active_requests": 0}

    @pytest.mark.parametrize("kwargs", [{"max_requests": 0}, {"window_seconds": 0}])
    def test_invalid_arguments(self, kwargs):
        """Test that non-positive limits are rejected."""
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(**kwargs)
