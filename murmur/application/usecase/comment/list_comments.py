"""List comments use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.config import CommentSettings
from murmur.domain.service import CommentService, IdentityService, ThreadService
from murmur.domain.value import PostId

from .item import CommentItem, parse_id, resolve_limit, to_comment_items


class ListCommentsRequest(BaseModel):
    """List comments request."""

    post_id: str  # UUID string
    cursor: str | None = None  # Path of the last comment already shown
    limit: int | None = None
    max_depth: int | None = None
    auth_token: str | None = None  # Optional, fills is_liked


class ListCommentsResponse(BaseModel):
    """One page of a post's comment tree."""

    data: list[CommentItem]
    has_more: bool
    next_cursor: str | None


class ListCommentsUseCase(BaseUseCase):
    """Use case for reading a post's comments in tree order."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        identity_service: IdentityService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize list comments use case.

        Args:
            thread_service: Tree pagination service
            comment_service: Comment domain service (like lookups)
            identity_service: Resolves the optional viewer
            comment_settings: Comment settings (page sizes)
        """
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.comment_settings = comment_settings

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Each comment is immediately followed by its subtree; pass
        ``max_depth=0`` for top-level comments only.

        Args:
            request: List comments request

        Returns:
            Page of comments with continuation cursor

        Raises:
            ValidationError: If the cursor or max_depth is invalid
        """
        post_id = PostId(parse_id(request.post_id, "post"))
        viewer = self.identity_service.resolve(request.auth_token)

        page = await self.thread_service.list_by_post(
            post_id=post_id,
            cursor=request.cursor,
            limit=resolve_limit(request.limit, self.comment_settings),
            max_depth=request.max_depth,
        )

        return ListCommentsResponse(
            data=await to_comment_items(page.data, viewer, self.comment_service),
            has_more=page.has_more,
            next_cursor=page.next_cursor,
        )
