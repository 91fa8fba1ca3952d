"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.domain.model import Comment
from murmur.domain.repository import CommentRepository
from murmur.domain.value import CommentId, CommentPath, PostId
from murmur.persistence.mappers import comment_to_dict, row_to_comment
from murmur.persistence.tables import comments_table

# Sorts immediately after "." in the C collation, so every strict descendant
# of P lies in the half-open range ["P.", "P/").
_DESCENDANT_UPPER_BOUND = "/"


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post_after_path(
        self,
        post_id: PostId,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan a post's comments in path order."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)

        if after_path is not None:
            stmt = stmt.where(comments_table.c.path > after_path.root)

        stmt = stmt.order_by(comments_table.c.path).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_descendants(
        self,
        post_id: PostId,
        ancestor_path: CommentPath,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan the strict descendants of a path within a post."""
        lower = ancestor_path.descendant_prefix
        if after_path is not None and after_path.root > lower:
            lower_clause = comments_table.c.path > after_path.root
        else:
            lower_clause = comments_table.c.path >= lower

        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(lower_clause)
            .where(
                comments_table.c.path < ancestor_path.root + _DESCENDANT_UPPER_BOUND
            )
            .order_by(comments_table.c.path)
            .limit(limit)
        )

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies_after_position(
        self,
        parent_id: CommentId,
        after_position: Optional[int],
        limit: int,
    ) -> List[Comment]:
        """Find direct replies of a comment in creation order."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if after_position is not None:
            stmt = stmt.where(comments_table.c.position > after_position)

        stmt = stmt.order_by(comments_table.c.position).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(comment.id) or comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def compare_and_swap_reply_sequence(
        self, comment_id: CommentId, expected: int, new: int
    ) -> bool:
        """Set next_reply_sequence only if it still equals expected."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.next_reply_sequence == expected)
            .values(next_reply_sequence=new)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def adjust_likes_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Atomically add delta to likes_count (minimum 0)."""
        return await self._adjust(
            comment_id,
            likes_count=func.greatest(comments_table.c.likes_count + delta, 0),
        )

    async def adjust_replies_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Atomically add delta to replies_count (minimum 0)."""
        return await self._adjust(
            comment_id,
            replies_count=func.greatest(comments_table.c.replies_count + delta, 0),
        )

    async def _adjust(self, comment_id: CommentId, **values) -> Optional[Comment]:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())
