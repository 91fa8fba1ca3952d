"""Unit tests for SequenceService."""

import asyncio
from uuid import uuid4

import pytest

from murmur.config import CommentSettings
from murmur.domain.error import (
    CapacityExceededError,
    ConcurrencyConflictError,
    NotFoundError,
)
from murmur.domain.model import Comment
from murmur.domain.repository import PostRepository
from murmur.domain.service import CommentService, SequenceService
from murmur.domain.value import CommentId, Handle, PostId, UserId, encode_path
from murmur.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
)
from tests.factories import add_comment, make_post, save_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class YieldingPostRepository(InMemoryPostRepository):
    """Post repository that hands control back to the loop after each read.

    Lets concurrent allocations interleave between reading the sequence and
    swapping it, the way they do against a real database.
    """

    async def find_by_id(self, post_id):
        post = await super().find_by_id(post_id)
        await asyncio.sleep(0)
        return post


class YieldingCommentRepository(InMemoryCommentRepository):
    """Comment repository that yields after each read."""

    async def find_by_id(self, comment_id):
        comment = await super().find_by_id(comment_id)
        await asyncio.sleep(0)
        return comment


class AlwaysConflictingPostRepository(InMemoryPostRepository):
    """Post repository whose compare-and-swap never wins."""

    def __init__(self) -> None:
        super().__init__()
        self.swap_attempts = 0

    async def compare_and_swap_comment_sequence(self, post_id, expected, new):
        self.swap_attempts += 1
        return False


class TestAllocateCommentPosition:
    """Tests for top-level position allocation."""

    @pytest.mark.asyncio
    async def test_positions_start_at_one_and_increase(self, unit_env):
        """Should hand out 1, 2, 3 for a fresh post."""
        # Arrange
        sequence_service = await unit_env.get(SequenceService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)

        # Act
        positions = [
            await sequence_service.allocate_comment_position(post.id) for _ in range(3)
        ]

        # Assert
        assert positions == [1, 2, 3]
        stored = await post_repo.find_by_id(post.id)
        assert stored.next_comment_sequence == 3

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        """Should raise NotFoundError for an unknown post."""
        # Arrange
        sequence_service = await unit_env.get(SequenceService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await sequence_service.allocate_comment_position(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_capacity_exhausted(self, unit_env):
        """Should refuse to allocate past 9999 and leave the counter alone."""
        # Arrange
        sequence_service = await unit_env.get(SequenceService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(
            make_post().model_copy(update={"next_comment_sequence": 9999})
        )

        # Act & Assert
        with pytest.raises(CapacityExceededError):
            await sequence_service.allocate_comment_position(post.id)

        stored = await post_repo.find_by_id(post.id)
        assert stored.next_comment_sequence == 9999

    @pytest.mark.asyncio
    async def test_last_position_is_allocatable(self, unit_env):
        # Arrange
        sequence_service = await unit_env.get(SequenceService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(
            make_post().model_copy(update={"next_comment_sequence": 9998})
        )

        # Act
        position = await sequence_service.allocate_comment_position(post.id)

        # Assert
        assert position == 9999

    @pytest.mark.asyncio
    async def test_concurrent_allocations_are_distinct_and_gapless(self):
        """Racing allocations on one post should produce 1..N exactly once each."""
        # Arrange
        post_repo = YieldingPostRepository()
        sequence_service = SequenceService(
            post_repository=post_repo,
            comment_repository=InMemoryCommentRepository(),
            comment_settings=CommentSettings(sequence_max_retries=50),
        )
        post = await save_post(post_repo)

        # Act
        positions = await asyncio.gather(
            *(sequence_service.allocate_comment_position(post.id) for _ in range(20))
        )

        # Assert
        assert sorted(positions) == list(range(1, 21))
        stored = await post_repo.find_by_id(post.id)
        assert stored.next_comment_sequence == 20

    @pytest.mark.asyncio
    async def test_gives_up_after_retry_budget(self):
        """Should raise ConcurrencyConflictError once every attempt lost."""
        # Arrange
        post_repo = AlwaysConflictingPostRepository()
        sequence_service = SequenceService(
            post_repository=post_repo,
            comment_repository=InMemoryCommentRepository(),
            comment_settings=CommentSettings(sequence_max_retries=4),
        )
        post = await save_post(post_repo)

        # Act & Assert
        with pytest.raises(ConcurrencyConflictError):
            await sequence_service.allocate_comment_position(post.id)

        assert post_repo.swap_attempts == 4


class TestAllocateReplyPosition:
    """Tests for reply position allocation."""

    @pytest.mark.asyncio
    async def test_sequences_are_per_parent(self, unit_env):
        """Each comment numbers its own replies from 1."""
        # Arrange
        sequence_service = await unit_env.get(SequenceService)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        first = await add_comment(comment_service, post.id, "first")
        second = await add_comment(comment_service, post.id, "second")

        # Act
        a1 = await sequence_service.allocate_reply_position(first.id)
        a2 = await sequence_service.allocate_reply_position(first.id)
        b1 = await sequence_service.allocate_reply_position(second.id)

        # Assert
        assert (a1, a2, b1) == (1, 2, 1)

    @pytest.mark.asyncio
    async def test_missing_parent(self, unit_env):
        # Arrange
        sequence_service = await unit_env.get(SequenceService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await sequence_service.allocate_reply_position(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_concurrent_replies_get_gapless_paths(self):
        """N racing replies to one parent should get positions 1..N."""
        # Arrange
        post_repo = InMemoryPostRepository()
        comment_repo = YieldingCommentRepository()
        settings = CommentSettings(sequence_max_retries=50)
        sequence_service = SequenceService(
            post_repository=post_repo,
            comment_repository=comment_repo,
            comment_settings=settings,
        )
        post = await save_post(post_repo)
        parent_position = await sequence_service.allocate_comment_position(post.id)
        assert parent_position == 1

        parent = await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                post_id=post.id,
                author_id=UserId(uuid4()),
                author_handle=Handle("alice"),
                path=encode_path(None, parent_position),
                depth=0,
                position=parent_position,
                text="parent",
            )
        )

        # Act
        positions = await asyncio.gather(
            *(sequence_service.allocate_reply_position(parent.id) for _ in range(15))
        )

        # Assert
        assert sorted(positions) == list(range(1, 16))
        paths = {encode_path(parent.path, p).root for p in positions}
        assert len(paths) == 15
