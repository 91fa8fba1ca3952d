"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from murmur.domain.model.comment import Comment
from murmur.domain.value import CommentId, CommentPath, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post_after_path(
        self,
        post_id: PostId,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan a post's comments in path (tree) order.

        Args:
            post_id: The post ID
            after_path: Only return comments whose path sorts strictly after
                this one (None to start from the beginning)
            limit: Maximum number of comments to return

        Returns:
            Comments ordered by path ascending
        """
        pass

    @abstractmethod
    async def find_descendants(
        self,
        post_id: PostId,
        ancestor_path: CommentPath,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan the strict descendants of a path within a post.

        Args:
            post_id: The post ID
            ancestor_path: Path whose subtree is scanned (excluded itself)
            after_path: Continue strictly after this path (None to start)
            limit: Maximum number of comments to return

        Returns:
            Descendant comments ordered by path ascending
        """
        pass

    @abstractmethod
    async def find_replies_after_position(
        self,
        parent_id: CommentId,
        after_position: Optional[int],
        limit: int,
    ) -> List[Comment]:
        """Find direct replies of a comment in creation order.

        Positions are allocated monotonically per parent, so ordering by
        position is ordering by creation.

        Args:
            parent_id: The parent comment ID
            after_position: Continue strictly after this position (None to start)
            limit: Maximum number of replies to return

        Returns:
            Replies ordered by position ascending
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Deleting a missing comment is a no-op so interrupted cascades can be
        replayed.

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    async def compare_and_swap_reply_sequence(
        self, comment_id: CommentId, expected: int, new: int
    ) -> bool:
        """Set the reply sequence only if it still equals expected.

        Args:
            comment_id: The parent comment ID
            expected: Sequence value the caller read
            new: Sequence value to store

        Returns:
            True if the swap happened, False if another writer got there first
            or the comment no longer exists
        """
        pass

    @abstractmethod
    async def adjust_likes_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Atomically add delta to likes_count (minimum 0).

        Args:
            comment_id: The comment ID
            delta: Amount to add (negative to decrement)

        Returns:
            Updated comment, or None if the comment doesn't exist
        """
        pass

    @abstractmethod
    async def adjust_replies_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Atomically add delta to replies_count (minimum 0).

        Args:
            comment_id: The comment ID
            delta: Amount to add (negative to decrement)

        Returns:
            Updated comment, or None if the comment doesn't exist
        """
        pass
