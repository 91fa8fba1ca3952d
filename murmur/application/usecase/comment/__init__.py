"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentResponse, GetCommentUseCase
from .get_comment_count import (
    GetCommentCountRequest,
    GetCommentCountResponse,
    GetCommentCountUseCase,
)
from .item import CommentItem
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .list_replies import ListRepliesRequest, ListRepliesResponse, ListRepliesUseCase
from .reply_to_comment import (
    ReplyToCommentRequest,
    ReplyToCommentResponse,
    ReplyToCommentUseCase,
)
from .toggle_comment_like import (
    ToggleCommentLikeRequest,
    ToggleCommentLikeResponse,
    ToggleCommentLikeUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentCountRequest",
    "GetCommentCountResponse",
    "GetCommentCountUseCase",
    "GetCommentRequest",
    "GetCommentResponse",
    "GetCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ListRepliesRequest",
    "ListRepliesResponse",
    "ListRepliesUseCase",
    "ReplyToCommentRequest",
    "ReplyToCommentResponse",
    "ReplyToCommentUseCase",
    "ToggleCommentLikeRequest",
    "ToggleCommentLikeResponse",
    "ToggleCommentLikeUseCase",
]
