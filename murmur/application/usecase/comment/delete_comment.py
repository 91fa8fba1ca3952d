"""Delete comment use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.service import CommentService, IdentityService, RateLimiter
from murmur.domain.value import CommentId, RateLimitAction

from .item import parse_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    cascade: bool = False  # Also delete every reply below the comment
    auth_token: str | None = None


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    message: str
    deleted_count: int


class DeleteCommentUseCase(BaseUseCase):
    """Use case for an author deleting their own comment."""

    def __init__(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            identity_service: Resolves the caller from the auth token
            rate_limiter: Guards against delete floods
        """
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Args:
            request: Delete comment request

        Returns:
            Confirmation with the number of comments removed

        Raises:
            AuthenticationRequiredError: If the caller is not authenticated
            RateLimitedError: If the caller is over the limit
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the caller is not the author
        """
        identity = self.identity_service.require_identity(request.auth_token)
        comment_id = CommentId(parse_id(request.comment_id, "comment"))

        await self.rate_limiter.check(
            RateLimitAction.DELETE_ACTION, str(identity.user_id)
        )

        deleted = await self.comment_service.remove(
            comment_id=comment_id,
            user_id=identity.user_id,
            cascade=request.cascade,
        )

        return DeleteCommentResponse(
            message="Comment deleted successfully",
            deleted_count=deleted,
        )
