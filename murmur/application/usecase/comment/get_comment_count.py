"""Get comment count use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.service import PostService
from murmur.domain.value import PostId

from .item import parse_id


class GetCommentCountRequest(BaseModel):
    """Get comment count request."""

    post_id: str  # UUID string


class GetCommentCountResponse(BaseModel):
    """Top-level comment count of a post."""

    post_id: str
    count: int


class GetCommentCountUseCase(BaseUseCase):
    """Use case for reading a post's denormalized comment count."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetCommentCountRequest) -> GetCommentCountResponse:
        """Return the count; a missing post counts 0."""
        post_id = PostId(parse_id(request.post_id, "post"))
        count = await self.post_service.get_comment_count(post_id)
        return GetCommentCountResponse(post_id=request.post_id, count=count)
