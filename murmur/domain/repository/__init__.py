"""Repository interfaces for Murmur domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from murmur.domain.repository.comment import CommentRepository
from murmur.domain.repository.comment_like import CommentLikeRepository
from murmur.domain.repository.post import PostRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "CommentLikeRepository",
]
