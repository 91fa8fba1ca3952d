"""PostgreSQL implementation of CommentLike repository."""

from typing import List, Optional, Sequence, Set

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import CommentLike
from murmur.domain.repository import CommentLikeRepository
from murmur.domain.value import CommentId, UserId
from murmur.persistence.mappers import comment_like_to_dict, row_to_comment_like
from murmur.persistence.tables import comment_likes_table


class PostgresCommentLikeRepository(CommentLikeRepository):
    """PostgreSQL implementation of CommentLikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, comment_id: CommentId, user_id: UserId) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        stmt = select(comment_likes_table).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_like(row._asdict()) if row else None

    async def insert_if_absent(self, like: CommentLike) -> bool:
        """Insert a like unless the (comment, user) pair exists."""
        stmt = (
            insert(comment_likes_table)
            .values(**comment_like_to_dict(like))
            .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment."""
        stmt = delete(comment_likes_table).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_by_comment(self, comment_id: CommentId, limit: int) -> List[CommentLike]:
        """Fetch up to limit likes of a comment."""
        stmt = (
            select(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
            .order_by(comment_likes_table.c.user_id)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment_like(row._asdict()) for row in result.fetchall()]

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which of the given comments a user has liked (batch query)."""
        if not comment_ids:
            return set()

        stmt = select(comment_likes_table.c.comment_id).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.comment_id) for row in result.fetchall()}
