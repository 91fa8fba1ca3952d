"""Comment domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from murmur.config import CommentSettings
from murmur.domain.error import NotAuthorizedError, NotFoundError
from murmur.domain.model import Comment, CommentLike
from murmur.domain.repository import CommentLikeRepository, CommentRepository
from murmur.domain.value import (
    CommentContent,
    CommentId,
    Handle,
    PostId,
    UserId,
    encode_path,
)

from .base import Service
from .cascade_service import CascadeDeletionService
from .counter_service import CounterService
from .post_service import PostService
from .sequence_service import SequenceService


class CommentService(Service):
    """Domain service for comment creation, likes and removal.

    Create and reply follow the same pipeline: allocate a sibling position
    from the parent's sequence, encode the child's path from it, insert the
    comment with fresh counters, then bump the parent's denormalized count.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        post_service: PostService,
        sequence_service: SequenceService,
        counter_service: CounterService,
        cascade_service: CascadeDeletionService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_like_repository: Comment like repository
            post_service: Post domain service
            sequence_service: Sibling position allocator
            counter_service: Denormalized counter maintenance
            cascade_service: Batched subtree and like deletion
            comment_settings: Comment settings (content limits)
        """
        self.comment_repository = comment_repository
        self.comment_like_repository = comment_like_repository
        self.post_service = post_service
        self.sequence_service = sequence_service
        self.counter_service = counter_service
        self.cascade_service = cascade_service
        self.comment_settings = comment_settings

    def _parse_content(
        self, text: Optional[str], audio_url: Optional[str]
    ) -> CommentContent:
        return CommentContent.parse(
            text,
            audio_url,
            max_text_length=self.comment_settings.max_text_length,
            max_url_length=self.comment_settings.max_url_length,
        )

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_handle: Handle,
        text: Optional[str] = None,
        audio_url: Optional[str] = None,
    ) -> Comment:
        """Create a top-level comment on a post.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_handle: Author handle
            text: Comment text
            audio_url: Reference to an uploaded audio clip

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the content is empty, too long or malformed
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            author_handle=author_handle.root,
        ):
            post = await self.post_service.get_post_by_id(post_id)
            if not post:
                raise NotFoundError("Post", str(post_id))

            content = self._parse_content(text, audio_url)

            position = await self.sequence_service.allocate_comment_position(post_id)
            path = encode_path(None, position)

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_handle=author_handle,
                parent_id=None,
                path=path,
                depth=0,
                position=position,
                text=content.text,
                audio_url=content.audio_url,
                likes_count=0,
                replies_count=0,
                next_reply_sequence=0,
                created_at=datetime.now(),
            )
            saved = await self.comment_repository.save(comment)

            await self.counter_service.increment_post_comments(post_id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                path=saved.path.root,
            )
            return saved

    async def reply(
        self,
        parent_id: CommentId,
        author_id: UserId,
        author_handle: Handle,
        text: Optional[str] = None,
        audio_url: Optional[str] = None,
    ) -> Comment:
        """Reply to an existing comment.

        Args:
            parent_id: Parent comment ID
            author_id: Author user ID
            author_handle: Author handle
            text: Reply text
            audio_url: Reference to an uploaded audio clip

        Returns:
            Created reply, one level deeper than its parent

        Raises:
            NotFoundError: If the parent comment doesn't exist
            ValidationError: If the content is empty, too long or malformed
        """
        with logfire.span(
            "comment_service.reply",
            parent_id=str(parent_id),
            author_id=str(author_id),
            author_handle=author_handle.root,
        ):
            parent = await self.comment_repository.find_by_id(parent_id)
            if not parent:
                logfire.warn("Parent comment not found", parent_id=str(parent_id))
                raise NotFoundError("Comment", str(parent_id))

            content = self._parse_content(text, audio_url)

            position = await self.sequence_service.allocate_reply_position(parent_id)
            path = encode_path(parent.path, position)

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=parent.post_id,
                author_id=author_id,
                author_handle=author_handle,
                parent_id=parent_id,
                path=path,
                depth=parent.depth + 1,
                position=position,
                text=content.text,
                audio_url=content.audio_url,
                likes_count=0,
                replies_count=0,
                next_reply_sequence=0,
                created_at=datetime.now(),
            )
            saved = await self.comment_repository.save(comment)

            await self.counter_service.increment_replies(parent_id)

            logfire.info(
                "Reply created",
                comment_id=str(saved.id),
                parent_id=str(parent_id),
                post_id=str(saved.post_id),
                path=saved.path.root,
                depth=saved.depth,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> tuple[Comment, bool]:
        """Like a comment, or remove the like if the user already liked it.

        Args:
            comment_id: Comment ID
            user_id: User ID of the caller

        Returns:
            Tuple of the updated comment and whether the user now likes it

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            existing = await self.comment_like_repository.find(comment_id, user_id)
            if existing:
                if await self.comment_like_repository.delete(comment_id, user_id):
                    await self.counter_service.decrement_likes(comment_id)
                liked = False
            else:
                inserted = await self.comment_like_repository.insert_if_absent(
                    CommentLike(
                        comment_id=comment_id,
                        user_id=user_id,
                        created_at=datetime.now(),
                    )
                )
                if inserted:
                    await self.counter_service.increment_likes(comment_id)
                else:
                    # A concurrent request already stored this like
                    logfire.warn(
                        "Duplicate like attempt",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                    )
                liked = True

            updated = await self.comment_repository.find_by_id(comment_id)
            if not updated:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                liked=liked,
                likes_count=updated.likes_count,
            )
            return updated, liked

    async def liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Return which of the given comments the user has liked.

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Set of liked comment IDs
        """
        if not comment_ids:
            return set()
        return await self.comment_like_repository.find_liked_comment_ids(
            user_id, comment_ids
        )

    async def remove(
        self, comment_id: CommentId, user_id: UserId, cascade: bool = False
    ) -> int:
        """Delete a comment, optionally with its whole subtree.

        Without cascade, replies stay in place with a parent_id that no
        longer resolves.

        Args:
            comment_id: Comment ID
            user_id: User ID of the caller (must be the author)
            cascade: Whether to delete all descendants too

        Returns:
            Number of comments deleted (including the target)

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the caller is not the author
        """
        with logfire.span(
            "comment_service.remove",
            comment_id=str(comment_id),
            user_id=str(user_id),
            cascade=cascade,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            await self.cascade_service.delete_likes(comment_id)

            removed = 1
            if cascade:
                removed += await self.cascade_service.cascade_delete(comment)

            if comment.parent_id:
                await self.counter_service.decrement_replies(comment.parent_id)
            else:
                await self.counter_service.decrement_post_comments(comment.post_id)

            await self.comment_repository.delete(comment_id)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                removed=removed,
            )
            return removed
