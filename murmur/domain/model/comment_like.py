"""Comment like entity.

A like is the existence of a (comment, user) pair; there is no other state.
"""

from datetime import datetime

from pydantic import Field

from murmur.domain.model.common import DomainModel
from murmur.domain.value import CommentId, UserId


class CommentLike(DomainModel):
    """A user's like on a comment (unique per comment and user)."""

    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
