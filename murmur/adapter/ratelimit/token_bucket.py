"""In-process token bucket rate limiter."""

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Callable

import logfire

from murmur.config import RateLimitSettings, TokenBucketSettings
from murmur.domain.error import RateLimitedError
from murmur.domain.service.rate_limiter import RateLimiter
from murmur.domain.value import RateLimitAction

SWEEP_INTERVAL_SECONDS = 60.0


@dataclass
class _Bucket:
    tokens: float
    updated_at: float


class TokenBucketRateLimiter(RateLimiter):
    """Token bucket per (action, caller) pair, held in process memory.

    A bucket starts full at ``capacity`` tokens and refills continuously at
    ``rate`` tokens per ``period_seconds``. Each check spends one token.
    State is per process, so limits apply per API worker.
    """

    def __init__(
        self,
        settings: RateLimitSettings,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            settings: Rate limit settings (per-action buckets)
            clock: Monotonic clock in seconds
            sweep_interval: Seconds between sweeps of refilled buckets
        """
        self.settings = settings
        self.clock = clock
        self.sweep_interval = sweep_interval
        self._buckets: dict[tuple[str, str], _Bucket] = {}
        self._lock = asyncio.Lock()
        self._last_sweep = clock()

    def _config_for(self, action: RateLimitAction) -> TokenBucketSettings:
        return self._config_for_value(action.value)

    def _config_for_value(self, action_value: str) -> TokenBucketSettings:
        return self.settings.buckets.get(action_value, self.settings.default_bucket)

    def _sweep(self, now: float) -> None:
        """Drop buckets that have refilled to capacity.

        A full bucket behaves exactly like a missing one, so removing it
        never changes a later decision. Caller must hold the lock.
        """
        refilled = []
        for bucket_key, bucket in self._buckets.items():
            config = self._config_for_value(bucket_key[0])
            refill_per_second = config.rate / config.period_seconds
            elapsed = max(now - bucket.updated_at, 0.0)
            if bucket.tokens + elapsed * refill_per_second >= config.capacity:
                refilled.append(bucket_key)
        for bucket_key in refilled:
            del self._buckets[bucket_key]
        self._last_sweep = now
        if refilled:
            logfire.debug("Rate limit buckets swept", removed=len(refilled), remaining=len(self._buckets))

    @property
    def bucket_count(self) -> int:
        """Number of buckets currently held in memory."""
        return len(self._buckets)

    async def check(self, action: RateLimitAction, key: str) -> None:
        """Spend one token from the caller's bucket for an action.

        Args:
            action: Action being performed
            key: Caller key (usually the user ID)

        Raises:
            RateLimitedError: If the bucket is empty
        """
        if not self.settings.enabled:
            return

        config = self._config_for(action)
        refill_per_second = config.rate / config.period_seconds

        async with self._lock:
            now = self.clock()
            if now - self._last_sweep >= self.sweep_interval:
                self._sweep(now)
            bucket = self._buckets.get((action.value, key))
            if bucket is None:
                bucket = _Bucket(tokens=float(config.capacity), updated_at=now)
                self._buckets[(action.value, key)] = bucket

            elapsed = max(now - bucket.updated_at, 0.0)
            bucket.tokens = min(
                float(config.capacity), bucket.tokens + elapsed * refill_per_second
            )
            bucket.updated_at = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                return

            retry_after = max(1, math.ceil((1.0 - bucket.tokens) / refill_per_second))

        logfire.warn(
            "Rate limit exceeded",
            action=action.value,
            key=key,
            retry_after=retry_after,
        )
        raise RateLimitedError(action.value, retry_after)
