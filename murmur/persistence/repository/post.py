"""PostgreSQL implementation of Post repository."""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import Post
from murmur.domain.repository import PostRepository
from murmur.domain.value import PostId
from murmur.persistence.mappers import post_to_dict, row_to_post
from murmur.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        existing = await self.find_by_id(post.id)

        if existing:
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = posts_table.insert().values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(post.id) or post

    async def compare_and_swap_comment_sequence(
        self, post_id: PostId, expected: int, new: int
    ) -> bool:
        """Set next_comment_sequence only if it still equals expected."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .where(posts_table.c.next_comment_sequence == expected)
            .values(next_comment_sequence=new)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def adjust_comments_count(self, post_id: PostId, delta: int) -> Optional[Post]:
        """Atomically add delta to comments_count (minimum 0)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(
                comments_count=func.greatest(posts_table.c.comments_count + delta, 0)
            )
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_post(row._asdict())
