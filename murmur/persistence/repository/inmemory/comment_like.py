"""In-memory comment like repository for testing."""

from typing import List, Optional, Sequence, Set

from murmur.domain.model.comment_like import CommentLike
from murmur.domain.repository.comment_like import CommentLikeRepository
from murmur.domain.value import CommentId, UserId


class InMemoryCommentLikeRepository(CommentLikeRepository):
    """In-memory implementation of CommentLikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[tuple[CommentId, UserId], CommentLike] = {}

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        return self._likes.get((comment_id, user_id))

    async def insert_if_absent(self, like: CommentLike) -> bool:
        """Insert a like unless the (comment, user) pair exists."""
        key = (like.comment_id, like.user_id)
        if key in self._likes:
            return False
        self._likes[key] = like
        return True

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment."""
        return self._likes.pop((comment_id, user_id), None) is not None

    async def find_by_comment(self, comment_id: CommentId, limit: int) -> List[CommentLike]:
        """Fetch up to limit likes of a comment."""
        likes = [like for like in self._likes.values() if like.comment_id == comment_id]
        return likes[:limit]

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which of the given comments a user has liked."""
        return {cid for cid in comment_ids if (cid, user_id) in self._likes}
