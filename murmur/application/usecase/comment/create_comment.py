"""Create comment use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.service import CommentService, IdentityService, RateLimiter
from murmur.domain.value import PostId, RateLimitAction

from .item import CommentItem, parse_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    text: str | None = None
    audio_url: str | None = None
    auth_token: str | None = None  # JWT token of the caller


class CreateCommentResponse(CommentItem):
    """Created top-level comment."""


class CreateCommentUseCase(BaseUseCase):
    """Use case for adding a top-level comment to a post."""

    def __init__(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            identity_service: Resolves the caller from the auth token
            rate_limiter: Guards against comment floods
        """
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Resolve the caller (required)
        2. Spend one unit of the caller's create_comment allowance
        3. Create the comment (position, path and post counter in one go)

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            AuthenticationRequiredError: If the caller is not authenticated
            RateLimitedError: If the caller is over the limit
            NotFoundError: If the post doesn't exist
            ValidationError: If the content is invalid
        """
        identity = self.identity_service.require_identity(request.auth_token)
        post_id = PostId(parse_id(request.post_id, "post"))

        await self.rate_limiter.check(
            RateLimitAction.CREATE_COMMENT, str(identity.user_id)
        )

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=identity.user_id,
            author_handle=identity.handle,
            text=request.text,
            audio_url=request.audio_url,
        )

        return CreateCommentResponse.from_comment(comment)
