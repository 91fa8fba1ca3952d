"""Tree-ordered, cursor-paginated comment listings."""

from typing import Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from murmur.config import CommentSettings
from murmur.domain.error import ValidationError
from murmur.domain.model import Comment, Page
from murmur.domain.repository import CommentRepository
from murmur.domain.value import CommentId, CommentPath, PostId
from murmur.util.cursor import CursorError, decode_cursor, encode_cursor

from .base import Service


class ThreadService(Service):
    """Domain service for reading comment threads.

    Post listings walk the tree in path order, which is a preorder traversal:
    every comment is immediately followed by its subtree. The continuation
    token for those is the plain path of the last returned comment. Reply
    listings are ordered by sibling position and use an opaque cursor.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            comment_settings: Comment settings (scan batch size)
        """
        self.comment_repository = comment_repository
        self.scan_batch_size = comment_settings.scan_batch_size

    async def list_by_post(
        self,
        post_id: PostId,
        cursor: Optional[str] = None,
        limit: int = 20,
        max_depth: Optional[int] = None,
    ) -> Page[Comment]:
        """List a post's comments in tree order.

        Args:
            post_id: Post ID
            cursor: Path of the last comment of the previous page
            limit: Page size
            max_depth: Only include comments at this depth or shallower

        Returns:
            Page of comments ordered by path

        Raises:
            ValidationError: If the cursor is not a comment path or
                max_depth is negative
        """
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        if max_depth is not None and max_depth < 0:
            raise ValidationError("max_depth must be >= 0")

        after_path = self._parse_path_cursor(cursor)

        with logfire.span(
            "thread_service.list_by_post",
            post_id=str(post_id),
            cursor=cursor,
            limit=limit,
            max_depth=max_depth,
        ):
            if max_depth is None:
                rows = await self.comment_repository.find_by_post_after_path(
                    post_id, after_path, limit + 1
                )
            else:
                rows = await self._scan_to_depth(post_id, after_path, limit, max_depth)

            page = self._page_by_path(rows, limit)
            logfire.info(
                "Comments listed",
                post_id=str(post_id),
                count=len(page.data),
                has_more=page.has_more,
            )
            return page

    async def list_replies(
        self,
        parent_id: CommentId,
        cursor: Optional[str] = None,
        limit: int = 20,
    ) -> Page[Comment]:
        """List the direct replies of a comment in creation order.

        A parent that doesn't exist simply has no replies.

        Args:
            parent_id: Parent comment ID
            cursor: Opaque cursor from the previous page
            limit: Page size

        Returns:
            Page of replies ordered by creation

        Raises:
            ValidationError: If the cursor is malformed
        """
        if limit < 1:
            raise ValidationError("Limit must be at least 1")

        after_position = self._parse_reply_cursor(cursor)

        with logfire.span(
            "thread_service.list_replies",
            parent_id=str(parent_id),
            cursor=cursor,
            limit=limit,
        ):
            rows = await self.comment_repository.find_replies_after_position(
                parent_id, after_position, limit + 1
            )

            has_more = len(rows) > limit
            data = rows[:limit]
            next_cursor = (
                encode_cursor({"position": data[-1].position}) if data else None
            )

            logfire.info(
                "Replies listed",
                parent_id=str(parent_id),
                count=len(data),
                has_more=has_more,
            )
            return Page[Comment](data=data, has_more=has_more, next_cursor=next_cursor)

    async def _scan_to_depth(
        self,
        post_id: PostId,
        after_path: Optional[CommentPath],
        limit: int,
        max_depth: int,
    ) -> list[Comment]:
        # Depth can't be part of the path range scan, so fetch fixed-size
        # batches and filter until the page overflows or the post runs out.
        matched: list[Comment] = []
        rounds = 0
        while True:
            batch = await self.comment_repository.find_by_post_after_path(
                post_id, after_path, self.scan_batch_size
            )
            rounds += 1
            matched.extend(c for c in batch if c.depth <= max_depth)

            if len(matched) > limit or len(batch) < self.scan_batch_size:
                break
            after_path = batch[-1].path

        logfire.debug(
            "Depth-filtered scan finished",
            post_id=str(post_id),
            rounds=rounds,
            matched=len(matched),
        )
        return matched

    @staticmethod
    def _page_by_path(rows: list[Comment], limit: int) -> Page[Comment]:
        has_more = len(rows) > limit
        data = rows[:limit]
        next_cursor = data[-1].path.root if data else None
        return Page[Comment](data=data, has_more=has_more, next_cursor=next_cursor)

    @staticmethod
    def _parse_path_cursor(cursor: Optional[str]) -> Optional[CommentPath]:
        if not cursor:
            return None
        try:
            return CommentPath(cursor)
        except PydanticValidationError:
            raise ValidationError(f"Invalid cursor: {cursor}")

    @staticmethod
    def _parse_reply_cursor(cursor: Optional[str]) -> Optional[int]:
        try:
            key = decode_cursor(cursor)
        except CursorError:
            raise ValidationError(f"Invalid cursor: {cursor}")
        if key is None:
            return None

        position = key.get("position")
        if not isinstance(position, int) or isinstance(position, bool) or position < 0:
            raise ValidationError(f"Invalid cursor: {cursor}")
        return position
