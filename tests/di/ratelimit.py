"""Mock rate limiter providers for testing."""

from dishka import Scope, provide

from murmur.adapter.ratelimit.token_bucket import TokenBucketRateLimiter
from murmur.config import RateLimitSettings
from murmur.domain.service import RateLimiter
from murmur.util.di.infrastructure.ratelimit import RateLimitProvider


class MockRateLimitProvider(RateLimitProvider):
    """Rate limiter that never throttles, so tests can mutate freely."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_rate_limiter(self) -> RateLimiter:
        """Provide a disabled token bucket limiter."""
        return TokenBucketRateLimiter(RateLimitSettings(enabled=False))
