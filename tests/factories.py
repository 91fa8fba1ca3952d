"""Builders for domain objects used across the test suite."""

from datetime import datetime
from uuid import uuid4

from murmur.domain.model import Comment, Post
from murmur.domain.repository import PostRepository
from murmur.domain.service import CommentService
from murmur.domain.value import Handle, PostId, UserId


def make_post(author_id: UserId | None = None) -> Post:
    """Build a fresh post with no comments.

    Args:
        author_id: Post author (random when omitted)

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        text="Thoughts on the new episode?",
        audio_url=None,
        next_comment_sequence=0,
        comments_count=0,
        created_at=datetime.now(),
    )


async def save_post(post_repo: PostRepository) -> Post:
    """Create and store a post."""
    return await post_repo.save(make_post())


async def add_comment(
    comment_service: CommentService,
    post_id: PostId,
    text: str,
    author_id: UserId | None = None,
    handle: str = "alice",
) -> Comment:
    """Create a top-level comment by a (random) author."""
    return await comment_service.create_comment(
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        author_handle=Handle(handle),
        text=text,
    )


async def add_reply(
    comment_service: CommentService,
    parent: Comment,
    text: str,
    author_id: UserId | None = None,
    handle: str = "bob",
) -> Comment:
    """Reply to a comment as a (random) author."""
    return await comment_service.reply(
        parent_id=parent.id,
        author_id=author_id or UserId(uuid4()),
        author_handle=Handle(handle),
        text=text,
    )
