"""Get comment use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.error import NotFoundError
from murmur.domain.service import CommentService, IdentityService
from murmur.domain.value import CommentId

from .item import CommentItem, parse_id, to_comment_items


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string
    auth_token: str | None = None


class GetCommentResponse(CommentItem):
    """Single comment."""


class GetCommentUseCase(BaseUseCase):
    """Use case for reading one comment."""

    def __init__(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
    ) -> None:
        self.comment_service = comment_service
        self.identity_service = identity_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment"))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", request.comment_id)

        viewer = self.identity_service.resolve(request.auth_token)
        [item] = await to_comment_items([comment], viewer, self.comment_service)
        return GetCommentResponse(**item.model_dump())
