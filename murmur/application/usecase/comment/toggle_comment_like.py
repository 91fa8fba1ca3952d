"""Toggle comment like use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.service import CommentService, IdentityService, RateLimiter
from murmur.domain.value import CommentId, RateLimitAction

from .item import CommentItem, parse_id


class ToggleCommentLikeRequest(BaseModel):
    """Toggle comment like request."""

    comment_id: str  # UUID string
    auth_token: str | None = None


class ToggleCommentLikeResponse(CommentItem):
    """Comment after the toggle; is_liked is the caller's new state."""


class ToggleCommentLikeUseCase(BaseUseCase):
    """Use case for liking a comment, or unliking it if already liked."""

    def __init__(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize toggle like use case.

        Args:
            comment_service: Comment domain service
            identity_service: Resolves the caller from the auth token
            rate_limiter: Guards against like spam
        """
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter

    async def execute(
        self, request: ToggleCommentLikeRequest
    ) -> ToggleCommentLikeResponse:
        """Execute toggle like flow.

        Args:
            request: Toggle like request

        Returns:
            Updated comment with the caller's like state

        Raises:
            AuthenticationRequiredError: If the caller is not authenticated
            RateLimitedError: If the caller is over the limit
            NotFoundError: If the comment doesn't exist
        """
        identity = self.identity_service.require_identity(request.auth_token)
        comment_id = CommentId(parse_id(request.comment_id, "comment"))

        await self.rate_limiter.check(RateLimitAction.TOGGLE_LIKE, str(identity.user_id))

        comment, liked = await self.comment_service.toggle_like(
            comment_id=comment_id, user_id=identity.user_id
        )

        return ToggleCommentLikeResponse.from_comment(comment, is_liked=liked)
