"""Domain value objects for Murmur."""

from murmur.domain.value.identifiers import CommentId, PostId, UserId
from murmur.domain.value.path import (
    MAX_POSITION,
    SEGMENT_WIDTH,
    CommentPath,
    encode_path,
    pad_segment,
)
from murmur.domain.value.types import (
    CommentContent,
    Handle,
    Identity,
    RateLimitAction,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Paths
    "CommentPath",
    "encode_path",
    "pad_segment",
    "MAX_POSITION",
    "SEGMENT_WIDTH",
    # Types
    "CommentContent",
    "Handle",
    "Identity",
    "RateLimitAction",
]
