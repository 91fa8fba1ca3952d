"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_like import InMemoryCommentLikeRepository
from .post import InMemoryPostRepository

__all__ = [
    "InMemoryCommentLikeRepository",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
]
