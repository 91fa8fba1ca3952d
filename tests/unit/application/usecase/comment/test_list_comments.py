"""Unit tests for ListCommentsUseCase and ListRepliesUseCase."""

from uuid import uuid4

import pytest

from murmur.application.usecase.comment import (
    ListCommentsRequest,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
)
from murmur.domain.error import ValidationError
from murmur.domain.repository import PostRepository
from murmur.domain.service import CommentService, IdentityService
from murmur.domain.value import UserId
from tests.factories import add_comment, add_reply, save_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_tree_order_with_is_liked(self, unit_env):
        """is_liked reflects the viewer when a token is given."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        identity_service = await unit_env.get(IdentityService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        first = await add_comment(comment_service, post.id, "hi")
        await add_comment(comment_service, post.id, "second")
        reply = await add_reply(comment_service, first, "hey")

        viewer_id = UserId(uuid4())
        await comment_service.toggle_like(reply.id, viewer_id)
        token = identity_service.create_token(viewer_id, "viewer")

        # Act
        response = await use_case.execute(
            ListCommentsRequest(post_id=str(post.id), auth_token=token)
        )

        # Assert
        assert [c.path for c in response.data] == ["0001", "0001.0001", "0002"]
        assert [c.is_liked for c in response.data] == [False, True, False]
        assert response.data[0].replies_count == 1
        assert response.data[1].likes_count == 1

    @pytest.mark.asyncio
    async def test_anonymous_viewer(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        comment = await add_comment(comment_service, post.id, "hi")
        await comment_service.toggle_like(comment.id, UserId(uuid4()))

        # Act
        response = await use_case.execute(ListCommentsRequest(post_id=str(post.id)))

        # Assert
        assert response.data[0].likes_count == 1
        assert response.data[0].is_liked is False

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, unit_env):
        """Oversized limits are clamped to the maximum page size."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        for i in range(105):
            await add_comment(comment_service, post.id, f"comment {i}")

        # Act
        response = await use_case.execute(
            ListCommentsRequest(post_id=str(post.id), limit=1000)
        )

        # Assert
        assert len(response.data) == 100
        assert response.has_more is True
        assert response.next_cursor == "0100"

    @pytest.mark.asyncio
    async def test_zero_limit_returns_one(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        await add_comment(comment_service, post.id, "one")
        await add_comment(comment_service, post.id, "two")

        # Act
        response = await use_case.execute(
            ListCommentsRequest(post_id=str(post.id), limit=0)
        )

        # Assert
        assert len(response.data) == 1

    @pytest.mark.asyncio
    async def test_invalid_post_id(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(ListCommentsRequest(post_id="nope"))


class TestListRepliesUseCase:
    """Tests for ListRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_pages_through_replies(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListRepliesUseCase)
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await save_post(post_repo)
        parent = await add_comment(comment_service, post.id, "parent")
        for i in range(3):
            await add_reply(comment_service, parent, f"reply {i}")

        # Act
        first = await use_case.execute(
            ListRepliesRequest(parent_id=str(parent.id), limit=2)
        )
        second = await use_case.execute(
            ListRepliesRequest(
                parent_id=str(parent.id), cursor=first.next_cursor, limit=2
            )
        )

        # Assert
        assert [c.text for c in first.data] == ["reply 0", "reply 1"]
        assert first.has_more is True
        assert [c.text for c in second.data] == ["reply 2"]
        assert second.has_more is False
