"""Auth token extraction for routes."""

from fastapi import Cookie, Header


def get_auth_token(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str | None:
    """Return the caller's JWT from the auth cookie or a Bearer header.

    The cookie wins when both are present.
    """
    if auth_token:
        return auth_token
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return None
