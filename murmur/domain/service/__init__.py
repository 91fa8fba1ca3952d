"""Domain services."""

from .base import Service
from .cascade_service import CascadeDeletionService
from .comment_service import CommentService
from .counter_service import CounterService
from .identity_service import IdentityService
from .post_service import PostService
from .rate_limiter import RateLimiter
from .sequence_service import SequenceService
from .thread_service import ThreadService

__all__ = [
    "CascadeDeletionService",
    "CommentService",
    "CounterService",
    "IdentityService",
    "PostService",
    "RateLimiter",
    "SequenceService",
    "Service",
    "ThreadService",
]
