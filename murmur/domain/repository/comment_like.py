"""Comment like repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Set

from murmur.domain.model.comment_like import CommentLike
from murmur.domain.value import CommentId, UserId


class CommentLikeRepository(ABC):
    """Repository for CommentLike entity.

    A (comment_id, user_id) pair is unique; implementations must enforce it.
    """

    @abstractmethod
    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[CommentLike]:
        """Find a user's like on a comment.

        Args:
            comment_id: The comment ID
            user_id: The user's ID

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, like: CommentLike) -> bool:
        """Insert a like unless the pair already exists.

        Args:
            like: The like to insert

        Returns:
            True if inserted, False if the user already liked the comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment.

        Args:
            comment_id: The comment ID
            user_id: The user's ID

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId, limit: int) -> List[CommentLike]:
        """Fetch up to limit likes of a comment (for batched deletion).

        Args:
            comment_id: The comment ID
            limit: Maximum number of likes to return

        Returns:
            List of likes on the comment
        """
        pass

    @abstractmethod
    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which of the given comments a user has liked (batch query).

        Args:
            user_id: The user's ID
            comment_ids: Comment IDs to check

        Returns:
            Subset of comment_ids liked by the user
        """
        pass
