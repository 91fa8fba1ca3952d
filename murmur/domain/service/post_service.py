"""Post domain service."""

import logfire

from murmur.domain.model.post import Post
from murmur.domain.repository import PostRepository
from murmur.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for the post data the comment engine relies on."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_comment_count(self, post_id: PostId) -> int:
        """Get a post's top-level comment count.

        Reads the denormalized counter, never counts rows.

        Args:
            post_id: Post ID

        Returns:
            Number of live top-level comments, 0 if the post doesn't exist
        """
        post = await self.get_post_by_id(post_id)
        return post.comments_count if post else 0
