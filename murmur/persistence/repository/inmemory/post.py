"""In-memory post repository for testing."""

from typing import Optional

from murmur.domain.model.post import Post
from murmur.domain.repository.post import PostRepository
from murmur.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Methods never await between reading and writing a post, so each one is
    atomic with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def compare_and_swap_comment_sequence(
        self, post_id: PostId, expected: int, new: int
    ) -> bool:
        """Set next_comment_sequence only if it still equals expected."""
        post = self._posts.get(post_id)
        if post is None or post.next_comment_sequence != expected:
            return False

        self._posts[post_id] = post.model_copy(update={"next_comment_sequence": new})
        return True

    async def adjust_comments_count(self, post_id: PostId, delta: int) -> Optional[Post]:
        """Add delta to comments_count (minimum 0)."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        updated = post.model_copy(
            update={"comments_count": max(post.comments_count + delta, 0)}
        )
        self._posts[post_id] = updated
        return updated
