"""PostgreSQL repository implementations."""

from murmur.persistence.repository.comment import PostgresCommentRepository
from murmur.persistence.repository.comment_like import PostgresCommentLikeRepository
from murmur.persistence.repository.post import PostgresPostRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresCommentLikeRepository",
]
