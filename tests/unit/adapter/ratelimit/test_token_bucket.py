"""Unit tests for TokenBucketRateLimiter."""

import pytest

from murmur.adapter.ratelimit.token_bucket import TokenBucketRateLimiter
from murmur.config import RateLimitSettings, TokenBucketSettings
from murmur.domain.error import RateLimitedError
from murmur.domain.value import RateLimitAction


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def make_limiter(
    clock, enabled: bool = True, sweep_interval: float = 60.0
) -> TokenBucketRateLimiter:
    settings = RateLimitSettings(
        enabled=enabled,
        buckets={
            "create_comment": TokenBucketSettings(
                rate=1, period_seconds=10.0, capacity=2
            ),
        },
        default_bucket=TokenBucketSettings(rate=5, period_seconds=60.0, capacity=5),
    )
    return TokenBucketRateLimiter(settings, clock=clock, sweep_interval=sweep_interval)


class TestTokenBucketRateLimiter:
    """Tests for the in-process token bucket."""

    @pytest.mark.asyncio
    async def test_allows_burst_up_to_capacity(self, clock):
        # Arrange
        limiter = make_limiter(clock)

        # Act
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

        # Assert
        with pytest.raises(RateLimitedError) as exc_info:
            await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        assert exc_info.value.action == "create_comment"
        assert exc_info.value.retry_after == 10

    @pytest.mark.asyncio
    async def test_refills_over_time(self, clock):
        # Arrange
        limiter = make_limiter(clock)
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

        # Act
        clock.advance(10.0)

        # Assert
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        with pytest.raises(RateLimitedError):
            await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

    @pytest.mark.asyncio
    async def test_retry_after_shrinks_as_bucket_refills(self, clock):
        # Arrange
        limiter = make_limiter(clock)
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        clock.advance(7.0)

        # Act & Assert
        with pytest.raises(RateLimitedError) as exc_info:
            await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        assert exc_info.value.retry_after == 3

    @pytest.mark.asyncio
    async def test_buckets_are_per_caller(self, clock):
        # Arrange
        limiter = make_limiter(clock)
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

        # Act & Assert
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-2")

    @pytest.mark.asyncio
    async def test_buckets_are_per_action(self, clock):
        """Unconfigured actions fall back to the default bucket."""
        # Arrange
        limiter = make_limiter(clock)
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

        # Act & Assert
        for _ in range(5):
            await limiter.check(RateLimitAction.TOGGLE_LIKE, "user-1")
        with pytest.raises(RateLimitedError):
            await limiter.check(RateLimitAction.TOGGLE_LIKE, "user-1")

    @pytest.mark.asyncio
    async def test_disabled_never_limits(self, clock):
        # Arrange
        limiter = make_limiter(clock, enabled=False)

        # Act & Assert
        for _ in range(50):
            await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")

    @pytest.mark.asyncio
    async def test_refilled_buckets_are_swept(self, clock):
        """Buckets of callers who went quiet do not accumulate."""
        # Arrange
        limiter = make_limiter(clock)
        for i in range(5000):
            await limiter.check(RateLimitAction.TOGGLE_LIKE, f"user-{i}")
        assert limiter.bucket_count == 5000

        # Act
        clock.advance(86400.0)
        await limiter.check(RateLimitAction.TOGGLE_LIKE, "user-late")

        # Assert
        assert limiter.bucket_count == 1

    @pytest.mark.asyncio
    async def test_sweep_keeps_partially_spent_buckets(self, clock):
        """A caller still short of tokens stays limited across a sweep."""
        # Arrange
        limiter = make_limiter(clock, sweep_interval=1.0)
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        clock.advance(5.0)

        # Act
        await limiter.check(RateLimitAction.CREATE_COMMENT, "user-2")

        # Assert
        assert limiter.bucket_count == 2
        with pytest.raises(RateLimitedError) as exc_info:
            await limiter.check(RateLimitAction.CREATE_COMMENT, "user-1")
        assert exc_info.value.retry_after == 5
