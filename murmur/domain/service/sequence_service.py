"""Sibling position allocation."""

from typing import Awaitable, Callable, Optional

import logfire

from murmur.config import CommentSettings
from murmur.domain.error import (
    CapacityExceededError,
    ConcurrencyConflictError,
    NotFoundError,
)
from murmur.domain.repository import CommentRepository, PostRepository
from murmur.domain.value import MAX_POSITION, CommentId, PostId

from .base import Service


class SequenceService(Service):
    """Allocates unique, gapless sibling positions per parent.

    Each parent (a post for top-level comments, a comment for replies) keeps a
    counter of the last position handed out. Allocation is an optimistic
    compare-and-swap loop: read the counter, try to store counter + 1 only if
    nobody changed it meanwhile, and re-read on a lost race. Two concurrent
    allocations against the same parent therefore always see distinct,
    consecutive values. The swap runs in the caller's unit of work, so the
    counter commits together with the child insert.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize sequence service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            comment_settings: Comment settings (retry budget)
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.max_retries = comment_settings.sequence_max_retries

    async def allocate_comment_position(self, post_id: PostId) -> int:
        """Allocate the next top-level comment position on a post.

        Args:
            post_id: Post ID

        Returns:
            Position >= 1, never handed out before for this post

        Raises:
            NotFoundError: If the post doesn't exist
            CapacityExceededError: If the post has no positions left
            ConcurrencyConflictError: If every attempt lost a race
        """

        async def read() -> Optional[int]:
            post = await self.post_repository.find_by_id(post_id)
            return post.next_comment_sequence if post else None

        with logfire.span(
            "sequence_service.allocate_comment_position", post_id=str(post_id)
        ):
            return await self._allocate(
                resource="Post",
                identifier=str(post_id),
                read=read,
                swap=lambda expected, new: (
                    self.post_repository.compare_and_swap_comment_sequence(
                        post_id, expected, new
                    )
                ),
            )

    async def allocate_reply_position(self, parent_id: CommentId) -> int:
        """Allocate the next reply position under a comment.

        Args:
            parent_id: Parent comment ID

        Returns:
            Position >= 1, never handed out before for this parent

        Raises:
            NotFoundError: If the parent comment doesn't exist
            CapacityExceededError: If the parent has no positions left
            ConcurrencyConflictError: If every attempt lost a race
        """

        async def read() -> Optional[int]:
            parent = await self.comment_repository.find_by_id(parent_id)
            return parent.next_reply_sequence if parent else None

        with logfire.span(
            "sequence_service.allocate_reply_position", parent_id=str(parent_id)
        ):
            return await self._allocate(
                resource="Comment",
                identifier=str(parent_id),
                read=read,
                swap=lambda expected, new: (
                    self.comment_repository.compare_and_swap_reply_sequence(
                        parent_id, expected, new
                    )
                ),
            )

    async def _allocate(
        self,
        resource: str,
        identifier: str,
        read: Callable[[], Awaitable[Optional[int]]],
        swap: Callable[[int, int], Awaitable[bool]],
    ) -> int:
        for attempt in range(1, self.max_retries + 1):
            current = await read()
            if current is None:
                logfire.warn(
                    "Sequence parent not found", resource=resource, id=identifier
                )
                raise NotFoundError(resource, identifier)

            position = current + 1
            if position > MAX_POSITION:
                logfire.error(
                    "Sequence capacity exhausted",
                    resource=resource,
                    id=identifier,
                    position=position,
                )
                raise CapacityExceededError(position, MAX_POSITION)

            if await swap(current, position):
                logfire.info(
                    "Position allocated",
                    resource=resource,
                    id=identifier,
                    position=position,
                    attempt=attempt,
                )
                return position

            logfire.warn(
                "Sequence update conflict, retrying",
                resource=resource,
                id=identifier,
                attempt=attempt,
            )

        raise ConcurrencyConflictError(resource, identifier, self.max_retries)
