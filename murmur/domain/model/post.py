"""Post aggregate root.

Posts are owned by the wider platform. The comment engine only owns the two
counters it keeps on them: the sequence seeding top-level comment positions
and the denormalized number of live top-level comments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from murmur.domain.model.common import DomainModel
from murmur.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    author_id: UserId
    text: Optional[str] = None
    audio_url: Optional[str] = None
    next_comment_sequence: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
