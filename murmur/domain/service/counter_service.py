"""Denormalized counter maintenance."""

from typing import Optional

import logfire

from murmur.domain.model import Comment, Post
from murmur.domain.repository import CommentRepository, PostRepository
from murmur.domain.value import CommentId, PostId

from .base import Service


class CounterService(Service):
    """Keeps likes, replies and top-level comment counts in step with mutations.

    Counters are adjusted incrementally for O(1) reads and never recomputed
    from a scan. Every adjustment is clamped at 0, so an interrupted cascade
    can leave a count too high but never negative.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize counter service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    async def increment_likes(self, comment_id: CommentId) -> Optional[Comment]:
        return await self._adjust_comment("likes", comment_id, 1)

    async def decrement_likes(self, comment_id: CommentId) -> Optional[Comment]:
        return await self._adjust_comment("likes", comment_id, -1)

    async def increment_replies(self, comment_id: CommentId) -> Optional[Comment]:
        return await self._adjust_comment("replies", comment_id, 1)

    async def decrement_replies(self, comment_id: CommentId) -> Optional[Comment]:
        return await self._adjust_comment("replies", comment_id, -1)

    async def increment_post_comments(self, post_id: PostId) -> Optional[Post]:
        return await self._adjust_post(post_id, 1)

    async def decrement_post_comments(self, post_id: PostId) -> Optional[Post]:
        return await self._adjust_post(post_id, -1)

    async def _adjust_comment(
        self, counter: str, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        with logfire.span(
            "counter_service.adjust_comment",
            counter=counter,
            comment_id=str(comment_id),
            delta=delta,
        ):
            if counter == "likes":
                updated = await self.comment_repository.adjust_likes_count(
                    comment_id, delta
                )
            else:
                updated = await self.comment_repository.adjust_replies_count(
                    comment_id, delta
                )

            if updated is None:
                logfire.warn(
                    "Counter target comment not found",
                    counter=counter,
                    comment_id=str(comment_id),
                )
            return updated

    async def _adjust_post(self, post_id: PostId, delta: int) -> Optional[Post]:
        with logfire.span(
            "counter_service.adjust_post", post_id=str(post_id), delta=delta
        ):
            updated = await self.post_repository.adjust_comments_count(post_id, delta)
            if updated is None:
                logfire.warn("Counter target post not found", post_id=str(post_id))
            else:
                logfire.info(
                    "Post comment count adjusted",
                    post_id=str(post_id),
                    new_count=updated.comments_count,
                )
            return updated
