"""Comment read model shared by the comment use cases."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from pydantic import BaseModel

from murmur.config import CommentSettings
from murmur.domain.error import ValidationError
from murmur.domain.model import Comment
from murmur.domain.service import CommentService
from murmur.domain.value import Identity


class CommentItem(BaseModel):
    """Comment as returned to clients."""

    id: str
    post_id: str
    author_id: str
    author_handle: str
    parent_id: str | None
    path: str
    depth: int
    text: str | None
    audio_url: str | None
    created_at: datetime
    likes_count: int
    replies_count: int
    is_liked: bool

    @classmethod
    def from_comment(cls, comment: Comment, is_liked: bool = False) -> "CommentItem":
        """Build the read model for a comment.

        Args:
            comment: Comment domain model
            is_liked: Whether the viewing user has liked the comment

        Returns:
            Comment item
        """
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_handle=comment.author_handle.root,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            path=comment.path.root,
            depth=comment.depth,
            text=comment.text,
            audio_url=comment.audio_url,
            created_at=comment.created_at,
            likes_count=comment.likes_count,
            replies_count=comment.replies_count,
            is_liked=is_liked,
        )


async def to_comment_items(
    comments: Sequence[Comment],
    viewer: Optional[Identity],
    comment_service: CommentService,
) -> list[CommentItem]:
    """Format comments for a viewer with one batched like lookup.

    Args:
        comments: Comments to format
        viewer: Viewing user, None for anonymous
        comment_service: Comment domain service

    Returns:
        Comment items in the same order
    """
    liked: set = set()
    if viewer and comments:
        liked = await comment_service.liked_comment_ids(
            viewer.user_id, [c.id for c in comments]
        )
    return [CommentItem.from_comment(c, is_liked=c.id in liked) for c in comments]


def parse_id(value: str, label: str) -> UUID:
    """Parse a client supplied identifier.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID: {value}")


def resolve_limit(limit: Optional[int], settings: CommentSettings) -> int:
    """Apply the default page size and clamp to [1, max_page_size]."""
    if limit is None:
        return settings.default_page_size
    return min(max(limit, 1), settings.max_page_size)
