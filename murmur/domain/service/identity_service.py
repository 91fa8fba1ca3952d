"""Caller identity resolution from auth tokens."""

from typing import Optional
from uuid import UUID

import logfire

from murmur.config import AuthSettings
from murmur.domain.error import AuthenticationRequiredError
from murmur.domain.value import Handle, Identity, UserId
from murmur.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class IdentityService(Service):
    """Domain service turning JWT tokens into caller identities.

    Tokens are issued by the platform's identity provider; this service only
    signs tokens for tooling and tests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, handle: str) -> str:
        """Create JWT token for a user.

        Args:
            user_id: User ID
            handle: Public handle

        Returns:
            JWT token string
        """
        with logfire.span(
            "identity_service.create_token", user_id=str(user_id), handle=handle
        ):
            token = create_token(str(user_id), handle, self.auth_settings)
            logfire.info("JWT token created", user_id=str(user_id), handle=handle)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("identity_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified", user_id=payload.user_id, handle=payload.handle
                )
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def resolve(self, token: Optional[str]) -> Optional[Identity]:
        """Resolve the caller identity without raising.

        Used by read operations, where an anonymous caller is fine.

        Args:
            token: JWT token string (optional)

        Returns:
            Identity if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Identity(
                user_id=UserId(UUID(payload.user_id)),
                handle=Handle(payload.handle),
            )
        except (JWTError, ValueError) as e:
            # Invalid or expired token, treat as anonymous
            logfire.debug(
                "Identity resolution failed, treating as anonymous", error=str(e)
            )
            return None

    def require_identity(self, token: Optional[str]) -> Identity:
        """Resolve the caller identity for a mutation.

        Args:
            token: JWT token string (optional)

        Returns:
            Identity of the caller

        Raises:
            AuthenticationRequiredError: If the token is missing or invalid
        """
        identity = self.resolve(token)
        if identity is None:
            raise AuthenticationRequiredError()
        return identity
