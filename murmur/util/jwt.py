"""JWT helpers for caller identity tokens.

The platform's identity provider signs HS256 tokens carrying the user's ID and
public handle. The comment service only verifies them; ``create_token`` exists
for tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from murmur.config import AuthSettings

REQUIRED_CLAIMS = ["exp", "user_id", "handle"]


class TokenPayload(BaseModel):
    """Claims of an identity token."""

    user_id: str
    handle: str
    exp: datetime
    iat: Optional[datetime] = None


class JWTError(Exception):
    """Token could not be verified."""

    pass


def create_token(
    user_id: str,
    handle: str,
    settings: AuthSettings,
    issued_at: Optional[datetime] = None,
) -> str:
    """Sign an identity token.

    Args:
        user_id: User ID (UUID string)
        handle: Public handle
        settings: Authentication settings
        issued_at: Issue time, defaults to now (UTC)

    Returns:
        Encoded JWT token
    """
    issued_at = issued_at or datetime.now(timezone.utc)

    claims = {
        "user_id": user_id,
        "handle": handle,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check a token's signature and expiry and return its claims.

    Args:
        token: Encoded JWT token
        settings: Authentication settings

    Returns:
        Token payload

    Raises:
        JWTError: If the token is expired, forged, malformed or missing claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.MissingRequiredClaimError as e:
        raise JWTError(f"Token is missing the {e.claim} claim")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload.model_validate(claims)
    except PydanticValidationError:
        raise JWTError("Token claims are malformed")
