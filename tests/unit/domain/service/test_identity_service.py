"""Unit tests for IdentityService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from murmur.config import AuthSettings
from murmur.domain.error import AuthenticationRequiredError
from murmur.domain.service import IdentityService
from murmur.domain.value import UserId


@pytest.fixture
def identity_service():
    return IdentityService(AuthSettings(jwt_secret="test-secret"))


class TestResolve:
    """Tests for resolving caller identities."""

    def test_round_trip(self, identity_service):
        """A token created by the service resolves to the same identity."""
        # Arrange
        user_id = UserId(uuid4())
        token = identity_service.create_token(user_id, "alice")

        # Act
        identity = identity_service.resolve(token)

        # Assert
        assert identity.user_id == user_id
        assert identity.handle.root == "alice"

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_missing_or_garbage_token_is_anonymous(self, identity_service, token):
        assert identity_service.resolve(token) is None

    def test_wrong_secret_is_anonymous(self, identity_service):
        # Arrange
        other = IdentityService(AuthSettings(jwt_secret="someone-else"))
        token = other.create_token(UserId(uuid4()), "mallory")

        # Act & Assert
        assert identity_service.resolve(token) is None

    def test_expired_token_is_anonymous(self, identity_service):
        # Arrange
        token = jwt.encode(
            {
                "user_id": str(uuid4()),
                "handle": "alice",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            "test-secret",
            algorithm="HS256",
        )

        # Act & Assert
        assert identity_service.resolve(token) is None

    def test_non_uuid_user_id_is_anonymous(self, identity_service):
        # Arrange
        token = jwt.encode(
            {
                "user_id": "alice",
                "handle": "alice",
                "exp": datetime.now(timezone.utc) + timedelta(days=1),
            },
            "test-secret",
            algorithm="HS256",
        )

        # Act & Assert
        assert identity_service.resolve(token) is None


class TestRequireIdentity:
    """Tests for mutations that need a caller."""

    def test_returns_identity(self, identity_service):
        # Arrange
        user_id = UserId(uuid4())
        token = identity_service.create_token(user_id, "alice")

        # Act
        identity = identity_service.require_identity(token)

        # Assert
        assert identity.user_id == user_id

    def test_raises_without_token(self, identity_service):
        with pytest.raises(AuthenticationRequiredError):
            identity_service.require_identity(None)
