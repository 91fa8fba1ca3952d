"""End-to-end tests for comment endpoints."""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from murmur.domain.repository import PostRepository
from murmur.domain.service import IdentityService
from murmur.domain.value import UserId
from murmur.interface.api.app import create_app
from tests.factories import save_post
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """Test container shared by the app and the test body."""
    test_container = build_test_container()
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def client(container):
    """HTTP client bound to the app."""
    app_instance = create_app(container)
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def post(container):
    """A post to comment on."""
    post_repo = await container.get(PostRepository)
    return await save_post(post_repo)


@pytest_asyncio.fixture
async def make_auth(container):
    """Factory for Authorization headers of fresh users."""
    async with container() as request_container:
        identity_service = await request_container.get(IdentityService)

    def _make_auth(handle: str = "alice", user_id: UserId | None = None) -> dict:
        token = identity_service.create_token(user_id or UserId(uuid4()), handle)
        return {"Authorization": f"Bearer {token}"}

    return _make_auth


class TestHealth:
    """Health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        # Act
        response = await client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCommentThreadFlow:
    """End-to-end tests for the comment API.

    Note: These tests focus on the HTTP API interface layer.
    More detailed business logic tests are in unit tests.
    """

    @pytest.mark.asyncio
    async def test_create_reply_list_delete(self, client, post, make_auth):
        """Walk a thread through creation, listing and cascade deletion."""
        # Arrange
        alice = make_auth("alice")
        bob = make_auth("bob")

        # Act - top-level comment
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "hi"}, headers=alice
        )
        assert response.status_code == 201
        first = response.json()
        assert first["path"] == "0001"
        assert first["depth"] == 0
        assert first["author_handle"] == "alice"

        # Act - reply
        response = await client.post(
            f"/comments/{first['id']}/replies", json={"text": "hey"}, headers=bob
        )
        assert response.status_code == 201
        reply = response.json()
        assert reply["path"] == "0001.0001"
        assert reply["depth"] == 1
        assert reply["parent_id"] == first["id"]

        # Act - second top-level comment
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "second"}, headers=bob
        )
        assert response.json()["path"] == "0002"

        # Assert - tree order
        response = await client.get(f"/posts/{post.id}/comments")
        assert response.status_code == 200
        listing = response.json()
        assert [c["path"] for c in listing["data"]] == ["0001", "0001.0001", "0002"]
        assert listing["data"][0]["replies_count"] == 1
        assert listing["has_more"] is False

        # Assert - top-level only
        response = await client.get(f"/posts/{post.id}/comments?max_depth=0")
        assert [c["path"] for c in response.json()["data"]] == ["0001", "0002"]

        # Assert - count
        response = await client.get(f"/posts/{post.id}/comments/count")
        assert response.json() == {"post_id": str(post.id), "count": 2}

        # Act - cascade delete
        response = await client.delete(
            f"/comments/{first['id']}?cascade=true", headers=alice
        )
        assert response.status_code == 200
        assert response.json()["deleted_count"] == 2

        # Assert - reply went with it
        response = await client.get(f"/comments/{reply['id']}")
        assert response.status_code == 404
        response = await client.get(f"/posts/{post.id}/comments/count")
        assert response.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_like_toggle(self, client, post, make_auth):
        # Arrange
        alice = make_auth("alice")
        fan = make_auth("fan")
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "like me"}, headers=alice
        )
        comment_id = response.json()["id"]

        # Act
        liked = await client.post(f"/comments/{comment_id}/like", headers=fan)
        as_fan = await client.get(f"/comments/{comment_id}", headers=fan)
        as_anonymous = await client.get(f"/comments/{comment_id}")
        unliked = await client.post(f"/comments/{comment_id}/like", headers=fan)

        # Assert
        assert liked.status_code == 200
        assert liked.json()["is_liked"] is True
        assert liked.json()["likes_count"] == 1
        assert as_fan.json()["is_liked"] is True
        assert as_anonymous.json()["is_liked"] is False
        assert unliked.json()["is_liked"] is False
        assert unliked.json()["likes_count"] == 0

    @pytest.mark.asyncio
    async def test_auth_cookie_is_accepted(self, client, post, make_auth):
        # Arrange
        token = make_auth("alice")["Authorization"].removeprefix("Bearer ")
        client.cookies.set("auth_token", token)

        # Act
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "via cookie"}
        )

        # Assert
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_replies_endpoint_pagination(self, client, post, make_auth):
        # Arrange
        alice = make_auth("alice")
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "parent"}, headers=alice
        )
        parent_id = response.json()["id"]
        for i in range(3):
            await client.post(
                f"/comments/{parent_id}/replies", json={"text": f"r{i}"}, headers=alice
            )

        # Act
        page1 = (await client.get(f"/comments/{parent_id}/replies?limit=2")).json()
        page2 = (
            await client.get(
                f"/comments/{parent_id}/replies",
                params={"limit": 2, "cursor": page1["next_cursor"]},
            )
        ).json()

        # Assert
        assert [c["text"] for c in page1["data"]] == ["r0", "r1"]
        assert page1["has_more"] is True
        assert [c["text"] for c in page2["data"]] == ["r2"]
        assert page2["has_more"] is False


class TestCommentErrors:
    """Error responses."""

    @pytest.mark.asyncio
    async def test_create_without_auth(self, client, post):
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "anonymous"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_with_invalid_token(self, client, post):
        response = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "forged"},
            headers={"Authorization": "Bearer invalid-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_on_unknown_post(self, client, make_auth):
        response = await client.post(
            f"/posts/{uuid4()}/comments", json={"text": "hello"}, headers=make_auth()
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_comment(self, client, post, make_auth):
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "   "}, headers=make_auth()
        )

        assert response.status_code == 400
        assert "text or audio" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_invalid_cursor(self, client, post):
        response = await client.get(f"/posts/{post.id}/comments?cursor=garbage")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_someone_elses_comment(self, client, post, make_auth):
        # Arrange
        response = await client.post(
            f"/posts/{post.id}/comments", json={"text": "mine"}, headers=make_auth("alice")
        )
        comment_id = response.json()["id"]

        # Act
        response = await client.delete(
            f"/comments/{comment_id}", headers=make_auth("mallory")
        )

        # Assert
        assert response.status_code == 403
