"""Opaque pagination cursors.

A cursor is a small JSON object, base64url-encoded without padding, so
clients treat it as an opaque token.
"""

import base64
import json
from typing import Any, Dict, Optional


class CursorError(ValueError):
    """Raised when a cursor token cannot be decoded."""

    pass


def encode_cursor(key: Optional[Dict[str, Any]]) -> Optional[str]:
    """Encode a continuation key as an opaque token.

    Args:
        key: Continuation key (None or empty for no cursor)

    Returns:
        Token string, or None when there is nothing to continue from
    """
    if not key:
        return None
    raw = json.dumps(key, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def decode_cursor(cursor: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode a token produced by ``encode_cursor``.

    Args:
        cursor: Token string (None or blank for no cursor)

    Returns:
        The continuation key, or None when no cursor was given

    Raises:
        CursorError: If the token is not a valid cursor
    """
    if not cursor or not cursor.strip():
        return None
    s = cursor.strip()
    pad = "=" * ((4 - (len(s) % 4)) % 4)
    try:
        raw = base64.urlsafe_b64decode((s + pad).encode("utf-8"))
        obj = json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        raise CursorError(f"Malformed cursor: {cursor}") from e
    if not isinstance(obj, dict):
        raise CursorError(f"Malformed cursor: {cursor}")
    return obj
