"""Rate limiter interface."""

from murmur.domain.value import RateLimitAction


class RateLimiter:
    """Generic rate limiter interface for mutating operations.

    Implementations live in the adapter layer.
    """

    async def check(self, action: RateLimitAction, key: str) -> None:
        """Consume one unit of the caller's allowance for an action.

        Args:
            action: Action being performed
            key: Caller key the allowance belongs to (usually the user ID)

        Raises:
            RateLimitedError: If the allowance is exhausted
        """
        raise NotImplementedError
