"""In-memory comment repository for testing."""

from typing import List, Optional

from murmur.domain.model.comment import Comment
from murmur.domain.repository.comment import CommentRepository
from murmur.domain.value import CommentId, CommentPath, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post_after_path(
        self,
        post_id: PostId,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan a post's comments in path order."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if after_path is not None:
            comments = [c for c in comments if c.path.root > after_path.root]

        comments.sort(key=lambda c: c.path.root)
        return comments[:limit]

    async def find_descendants(
        self,
        post_id: PostId,
        ancestor_path: CommentPath,
        after_path: Optional[CommentPath],
        limit: int,
    ) -> List[Comment]:
        """Range scan the strict descendants of a path within a post."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and ancestor_path.is_ancestor_of(c.path)
        ]

        if after_path is not None:
            comments = [c for c in comments if c.path.root > after_path.root]

        comments.sort(key=lambda c: c.path.root)
        return comments[:limit]

    async def find_replies_after_position(
        self,
        parent_id: CommentId,
        after_position: Optional[int],
        limit: int,
    ) -> List[Comment]:
        """Find direct replies of a comment in creation order."""
        replies = [c for c in self._comments.values() if c.parent_id == parent_id]

        if after_position is not None:
            replies = [c for c in replies if c.position > after_position]

        replies.sort(key=lambda c: c.position)
        return replies[:limit]

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        for existing in self._comments.values():
            if (
                existing.id != comment.id
                and existing.post_id == comment.post_id
                and existing.path == comment.path
            ):
                raise ValueError(
                    f"Duplicate path {comment.path} on post {comment.post_id}"
                )

        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)

    async def compare_and_swap_reply_sequence(
        self, comment_id: CommentId, expected: int, new: int
    ) -> bool:
        """Set next_reply_sequence only if it still equals expected."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.next_reply_sequence != expected:
            return False

        self._comments[comment_id] = comment.model_copy(
            update={"next_reply_sequence": new}
        )
        return True

    async def adjust_likes_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Add delta to likes_count (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={"likes_count": max(comment.likes_count + delta, 0)}
        )
        self._comments[comment_id] = updated
        return updated

    async def adjust_replies_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Add delta to replies_count (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={"replies_count": max(comment.replies_count + delta, 0)}
        )
        self._comments[comment_id] = updated
        return updated
