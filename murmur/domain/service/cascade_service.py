"""Bounded-batch deletion of comment subtrees and likes."""

import logfire

from murmur.config import CommentSettings
from murmur.domain.model import Comment
from murmur.domain.repository import CommentLikeRepository, CommentRepository
from murmur.domain.value import CommentId

from .base import Service
from .counter_service import CounterService


class CascadeDeletionService(Service):
    """Deletes likes and descendant comments a bounded batch at a time.

    Nothing here loads a whole subtree into memory: each round fetches at most
    ``delete_batch_size`` rows, deletes them, and continues after the last
    path seen. Rounds are not atomic with each other. Every step tolerates
    rows that are already gone, so if a request dies halfway the next
    ``remove`` of the same comment rescans and finishes the job.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        counter_service: CounterService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize cascade deletion service.

        Args:
            comment_repository: Comment repository
            comment_like_repository: Comment like repository
            counter_service: Counter service for replies_count upkeep
            comment_settings: Comment settings (batch size)
        """
        self.comment_repository = comment_repository
        self.comment_like_repository = comment_like_repository
        self.counter_service = counter_service
        self.batch_size = comment_settings.delete_batch_size

    async def delete_likes(self, comment_id: CommentId) -> int:
        """Delete every like on a comment in batches.

        Args:
            comment_id: Comment ID

        Returns:
            Number of likes deleted
        """
        with logfire.span("cascade_service.delete_likes", comment_id=str(comment_id)):
            deleted = 0
            while True:
                batch = await self.comment_like_repository.find_by_comment(
                    comment_id, limit=self.batch_size
                )
                for like in batch:
                    if await self.comment_like_repository.delete(
                        like.comment_id, like.user_id
                    ):
                        deleted += 1

                if len(batch) < self.batch_size:
                    break

            if deleted:
                logfire.info(
                    "Comment likes deleted", comment_id=str(comment_id), count=deleted
                )
            return deleted

    async def cascade_delete(self, comment: Comment) -> int:
        """Delete every descendant of a comment, leaving the comment itself.

        Args:
            comment: Root of the subtree being removed

        Returns:
            Number of descendant comments deleted
        """
        with logfire.span(
            "cascade_service.cascade_delete",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            path=comment.path.root,
        ):
            deleted = 0
            after_path = None
            rounds = 0

            while True:
                batch = await self.comment_repository.find_descendants(
                    post_id=comment.post_id,
                    ancestor_path=comment.path,
                    after_path=after_path,
                    limit=self.batch_size,
                )
                rounds += 1

                for descendant in batch:
                    if not comment.path.is_ancestor_of(descendant.path):
                        continue

                    await self.delete_likes(descendant.id)
                    if descendant.parent_id == comment.id:
                        await self.counter_service.decrement_replies(comment.id)
                    await self.comment_repository.delete(descendant.id)
                    deleted += 1

                if len(batch) < self.batch_size:
                    break
                after_path = batch[-1].path

            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment.id),
                descendants=deleted,
                rounds=rounds,
            )
            return deleted
