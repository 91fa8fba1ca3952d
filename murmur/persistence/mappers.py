"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from murmur.domain.model import Comment, CommentLike, Post
from murmur.domain.value import CommentId, CommentPath, PostId, UserId
from murmur.domain.value.types import Handle


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        text=row.get("text"),
        audio_url=row.get("audio_url"),
        next_comment_sequence=row["next_comment_sequence"],
        comments_count=row["comments_count"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        path=CommentPath(row["path"]),
        depth=row["depth"],
        position=row["position"],
        text=row.get("text"),
        audio_url=row.get("audio_url"),
        likes_count=row["likes_count"],
        replies_count=row["replies_count"],
        next_reply_sequence=row["next_reply_sequence"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_comment_like(row: Dict[str, Any]) -> CommentLike:
    """Convert database row to CommentLike domain model.

    Args:
        row: Database row as dict

    Returns:
        CommentLike domain model
    """
    return CommentLike(
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def comment_like_to_dict(like: CommentLike) -> Dict[str, Any]:
    """Convert CommentLike domain model to database dict.

    Args:
        like: CommentLike domain model

    Returns:
        Dict suitable for database insertion
    """
    return like.model_dump()
