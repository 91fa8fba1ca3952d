"""Domain model entities for Murmur."""

from murmur.domain.model.comment import Comment
from murmur.domain.model.comment_like import CommentLike
from murmur.domain.model.page import Page
from murmur.domain.model.post import Post

__all__ = [
    "Post",
    "Comment",
    "CommentLike",
    "Page",
]
