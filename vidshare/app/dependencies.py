"""
Service Dependency Injection
FastAPI dependency providers for the caller identity and services
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.app.config import get_config
from vidshare.app.database import get_session
from vidshare.app.models import User
from vidshare.domain.interfaces import IdentityResolver, IdentityVerifier
from vidshare.infrastructure.identity import JwtTokenResolver, RejectingVerifier
from vidshare.infrastructure.repositories import (
    CommentRepository,
    ReactionRepository,
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
    ViewRepository,
)
from vidshare.services import (
    AuthenticationRequiredError,
    CommentService,
    FeedService,
    ReactionService,
    SubscriptionService,
    UserService,
    VideoService,
    ViewService,
)

bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================================
# Caller Identity
# ============================================================================


def get_identity_resolver(
    db: AsyncSession = Depends(get_session),
) -> IdentityResolver:
    """Session tokens are verified with the configured AUTH_ secret"""
    return JwtTokenResolver(db, get_config().auth)


def get_identity_verifier() -> IdentityVerifier:
    """Override this dependency to plug in the sign-in identity provider"""
    return RejectingVerifier()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[User]:
    """
    Optional caller identity

    Reads the bearer token, falling back to the session cookie. Missing,
    unsigned, expired or unknown tokens yield None (anonymous caller).
    """
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(get_config().auth.cookie_name)
    if not token:
        return None
    return await resolver.resolve(token)


async def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    """Caller identity for protected routes"""
    if user is None:
        raise AuthenticationRequiredError()
    return user


# ============================================================================
# Service Factories
# ============================================================================


def get_feed_service(db: AsyncSession = Depends(get_session)) -> FeedService:
    return FeedService(
        video_repo=VideoRepository(db),
        comment_repo=CommentRepository(db),
        reaction_repo=ReactionRepository(db),
        view_repo=ViewRepository(db),
        subscription_repo=SubscriptionRepository(db),
        config=get_config(),
    )


def get_video_service(db: AsyncSession = Depends(get_session)) -> VideoService:
    return VideoService(video_repo=VideoRepository(db), config=get_config())


def get_reaction_service(db: AsyncSession = Depends(get_session)) -> ReactionService:
    return ReactionService(
        video_repo=VideoRepository(db),
        reaction_repo=ReactionRepository(db),
        config=get_config(),
    )


def get_view_service(db: AsyncSession = Depends(get_session)) -> ViewService:
    return ViewService(
        video_repo=VideoRepository(db),
        view_repo=ViewRepository(db),
        config=get_config(),
    )


def get_comment_service(db: AsyncSession = Depends(get_session)) -> CommentService:
    return CommentService(
        video_repo=VideoRepository(db),
        comment_repo=CommentRepository(db),
        config=get_config(),
    )


def get_subscription_service(
    db: AsyncSession = Depends(get_session),
) -> SubscriptionService:
    return SubscriptionService(
        subscription_repo=SubscriptionRepository(db),
        user_repo=UserRepository(db),
        config=get_config(),
    )


def get_user_service(db: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(user_repo=UserRepository(db), config=get_config())
