"""Application layer DI providers."""

from dishka import Scope, provide

from murmur.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentCountUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
    ReplyToCommentUseCase,
    ToggleCommentLikeUseCase,
)
from murmur.config import CommentSettings
from murmur.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    RateLimiter,
    ThreadService,
)
from murmur.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Mutations
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            identity_service=identity_service,
            rate_limiter=rate_limiter,
        )

    @provide(scope=Scope.REQUEST)
    def get_reply_to_comment_use_case(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> ReplyToCommentUseCase:
        """Provide reply use case."""
        return ReplyToCommentUseCase(
            comment_service=comment_service,
            identity_service=identity_service,
            rate_limiter=rate_limiter,
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_comment_like_use_case(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> ToggleCommentLikeUseCase:
        """Provide toggle like use case."""
        return ToggleCommentLikeUseCase(
            comment_service=comment_service,
            identity_service=identity_service,
            rate_limiter=rate_limiter,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            identity_service=identity_service,
            rate_limiter=rate_limiter,
        )

    # Reads
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        identity_service: IdentityService,
        comment_settings: CommentSettings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            thread_service=thread_service,
            comment_service=comment_service,
            identity_service=identity_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        identity_service: IdentityService,
        comment_settings: CommentSettings,
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(
            thread_service=thread_service,
            comment_service=comment_service,
            identity_service=identity_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self,
        comment_service: CommentService,
        identity_service: IdentityService,
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            comment_service=comment_service,
            identity_service=identity_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_count_use_case(
        self, post_service: PostService
    ) -> GetCommentCountUseCase:
        """Provide get comment count use case."""
        return GetCommentCountUseCase(post_service=post_service)
