"""Reply to comment use case."""

from pydantic import BaseModel

from murmur.application.usecase.base import BaseUseCase
from murmur.domain.service import CommentService, IdentityService, RateLimiter
from murmur.domain.value import CommentId, RateLimitAction

from .item import CommentItem, parse_id


class ReplyToCommentRequest(BaseModel):
    """Reply to comment request."""

    parent_id: str  # UUID string of the comment being answered
    text: str | None = None
    audio_url: str | None = None
    auth_token: str | None = None


class ReplyToCommentResponse(CommentItem):
    """Created reply."""


class ReplyToCommentUseCase(BaseUseCase):
    """Use case for replying to an existing comment at any depth."""

    def __init__(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> None:
        """Initialize reply use case.

        Args:
            comment_service: Comment domain service
            identity_service: Resolves the caller from the auth token
            rate_limiter: Guards against reply floods
        """
        self.comment_service = comment_service
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: ReplyToCommentRequest) -> ReplyToCommentResponse:
        """Execute reply flow.

        Args:
            request: Reply request

        Returns:
            The created reply

        Raises:
            AuthenticationRequiredError: If the caller is not authenticated
            RateLimitedError: If the caller is over the limit
            NotFoundError: If the parent comment doesn't exist
            ValidationError: If the content is invalid
        """
        identity = self.identity_service.require_identity(request.auth_token)
        parent_id = CommentId(parse_id(request.parent_id, "comment"))

        await self.rate_limiter.check(
            RateLimitAction.REPLY_TO_COMMENT, str(identity.user_id)
        )

        reply = await self.comment_service.reply(
            parent_id=parent_id,
            author_id=identity.user_id,
            author_handle=identity.handle,
            text=request.text,
            audio_url=request.audio_url,
        )

        return ReplyToCommentResponse.from_comment(reply)
