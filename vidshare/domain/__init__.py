"""
Domain layer

Repository protocols the services depend on, and the small value types they
exchange. ORM classes live in vidshare.app.models; concrete repositories in
vidshare.infrastructure.repositories.
"""
from .interfaces import (
    IUserRepository,
    IVideoRepository,
    ICommentRepository,
    IReactionRepository,
    IViewRepository,
    ISubscriptionRepository,
    IdentityResolver,
    IdentityVerifier,
)
from .models import (
    Polarity,
    ReactionState,
    EngagementCounts,
    ViewerFlags,
    VerifiedIdentity,
)

__all__ = [
    "IUserRepository",
    "IVideoRepository",
    "ICommentRepository",
    "IReactionRepository",
    "IViewRepository",
    "ISubscriptionRepository",
    "IdentityResolver",
    "IdentityVerifier",
    "Polarity",
    "ReactionState",
    "EngagementCounts",
    "ViewerFlags",
    "VerifiedIdentity",
]
