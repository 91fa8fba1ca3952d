"""Unit tests for domain error to HTTP translation."""

import pytest

from murmur.domain.error import (
    AuthenticationRequiredError,
    CapacityExceededError,
    ConcurrencyConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from murmur.interface.error import to_http_exception


class TestToHttpException:
    """Tests for to_http_exception."""

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (NotFoundError("Comment", "abc"), 404),
            (ValidationError("bad"), 400),
            (CapacityExceededError(10000, 9999), 400),
            (AuthenticationRequiredError(), 401),
            (NotAuthorizedError("comment", "abc", "someone"), 403),
            (ConcurrencyConflictError("Post", "abc", 10), 409),
            (DomainError("surprise"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert to_http_exception(error).status_code == status_code

    def test_rate_limited_sets_retry_after(self):
        # Act
        exc = to_http_exception(RateLimitedError("create_comment", 7))

        # Assert
        assert exc.status_code == 429
        assert exc.headers == {"Retry-After": "7"}

    def test_unmapped_error_hides_details(self):
        exc = to_http_exception(DomainError("database password is hunter2"))

        assert exc.detail == "Internal server error"
