"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from murmur.domain.error import (
    AuthenticationRequiredError,
    ConcurrencyConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP exception a route should raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with status code, detail and headers
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )
    if isinstance(error, AuthenticationRequiredError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, RateLimitedError):
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(error),
            headers={"Retry-After": str(error.retry_after)},
        )
    if isinstance(error, ConcurrencyConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))

    logfire.error("Unmapped domain error", error=str(error), type=type(error).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
