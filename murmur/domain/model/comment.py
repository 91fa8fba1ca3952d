"""Comment entity.

Comments are threaded discussions on posts with unlimited depth.
They use a materialized path for tree-ordered range scans.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from murmur.domain.model.common import DomainModel
from murmur.domain.value import CommentId, CommentPath, PostId, UserId
from murmur.domain.value.types import Handle


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - path: Materialized path, parent path plus this comment's own segment
    - depth: Nesting level, always the path depth
    - position: Sibling position allocated from the parent's sequence

    likes_count and replies_count are denormalized counters maintained
    incrementally; next_reply_sequence seeds the positions of this
    comment's own replies.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_handle: Handle
    parent_id: Optional[CommentId] = None
    path: CommentPath
    depth: int = Field(default=0, ge=0)
    position: int = Field(ge=1)
    text: Optional[str] = None
    audio_url: Optional[str] = None
    likes_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    next_reply_sequence: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_threading(self) -> "Comment":
        """Validate depth, position and parent agree with the path."""
        if self.depth != self.path.depth:
            raise ValueError(
                f"Depth {self.depth} does not match path {self.path} "
                f"(depth {self.path.depth})"
            )
        if self.position != self.path.position:
            raise ValueError(
                f"Position {self.position} does not match path {self.path}"
            )
        if (self.parent_id is None) != (self.depth == 0):
            raise ValueError("parent_id must be set exactly when depth > 0")
        if not self.text and not self.audio_url:
            raise ValueError("Comment must have either text or audio")
        return self
