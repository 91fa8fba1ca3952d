"""Domain layer DI providers."""

from dishka import Scope, provide

from murmur.config import AuthSettings, CommentSettings
from murmur.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    PostRepository,
)
from murmur.domain.service import (
    CascadeDeletionService,
    CommentService,
    CounterService,
    IdentityService,
    PostService,
    SequenceService,
    ThreadService,
)
from murmur.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_sequence_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> SequenceService:
        """Provide sibling position allocator."""
        return SequenceService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            comment_settings=comment_settings,
        )

    @provide
    def get_counter_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> CounterService:
        """Provide denormalized counter service."""
        return CounterService(
            post_repository=post_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_cascade_service(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        counter_service: CounterService,
        comment_settings: CommentSettings,
    ) -> CascadeDeletionService:
        """Provide batched cascade deletion service."""
        return CascadeDeletionService(
            comment_repository=comment_repository,
            comment_like_repository=comment_like_repository,
            counter_service=counter_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        post_service: PostService,
        sequence_service: SequenceService,
        counter_service: CounterService,
        cascade_service: CascadeDeletionService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_like_repository=comment_like_repository,
            post_service=post_service,
            sequence_service=sequence_service,
            counter_service=counter_service,
            cascade_service=cascade_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> ThreadService:
        """Provide tree pagination service."""
        return ThreadService(
            comment_repository=comment_repository,
            comment_settings=comment_settings,
        )
