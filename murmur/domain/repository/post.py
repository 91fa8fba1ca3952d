"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from murmur.domain.model.post import Post
from murmur.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Only the parts of a post the comment engine owns are exposed here:
    lookup, storage, and the two comment counters.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def compare_and_swap_comment_sequence(
        self, post_id: PostId, expected: int, new: int
    ) -> bool:
        """Set the top-level comment sequence only if it still equals expected.

        Args:
            post_id: The post ID
            expected: Sequence value the caller read
            new: Sequence value to store

        Returns:
            True if the swap happened, False if another writer got there first
            or the post no longer exists
        """
        pass

    @abstractmethod
    async def adjust_comments_count(self, post_id: PostId, delta: int) -> Optional[Post]:
        """Atomically add delta to the top-level comment count (minimum 0).

        Args:
            post_id: The post ID
            delta: Amount to add (negative to decrement)

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass
