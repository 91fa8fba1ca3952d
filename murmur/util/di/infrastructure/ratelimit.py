"""Rate limiter infrastructure providers."""

from dishka import Scope, provide

from murmur.adapter.ratelimit.token_bucket import TokenBucketRateLimiter
from murmur.config import RateLimitSettings
from murmur.domain.service import RateLimiter
from murmur.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limiter component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter: per-process token buckets."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_rate_limiter(self, settings: RateLimitSettings) -> RateLimiter:
        """Provide the rate limiter.

        APP scope, so buckets survive across requests.
        """
        return TokenBucketRateLimiter(settings)
