"""List replies use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.config import CommentSettings
from murmur.domain.service import CommentService, IdentityService, ThreadService
from murmur.domain.value import CommentId

from .item import CommentItem, parse_id, resolve_limit, to_comment_items


class ListRepliesRequest(BaseModel):
    """List replies request."""

    parent_id: str  # UUID string
    cursor: str | None = None  # Opaque cursor from the previous page
    limit: int | None = None
    auth_token: str | None = None


class ListRepliesResponse(BaseModel):
    """One page of direct replies."""

    data: list[CommentItem]
    has_more: bool
    next_cursor: str | None


class ListRepliesUseCase(BaseUseCase):
    """Use case for reading the direct replies of a comment, oldest first."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        identity_service: IdentityService,
        comment_settings: CommentSettings,
    ) -> None:
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.comment_settings = comment_settings

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        Args:
            request: List replies request

        Returns:
            Page of replies (empty if the parent doesn't exist)

        Raises:
            ValidationError: If the cursor is malformed
        """
        parent_id = CommentId(parse_id(request.parent_id, "comment"))
        viewer = self.identity_service.resolve(request.auth_token)

        page = await self.thread_service.list_replies(
            parent_id=parent_id,
            cursor=request.cursor,
            limit=resolve_limit(request.limit, self.comment_settings),
        )

        return ListRepliesResponse(
            data=await to_comment_items(page.data, viewer, self.comment_service),
            has_more=page.has_more,
            next_cursor=page.next_cursor,
        )
