"""
Identity Resolution
Signed session tokens and the sign-in verifier seam
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.app.config import AuthConfig, get_config
from vidshare.app.models import User
from vidshare.domain.models import VerifiedIdentity
from vidshare.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


# ============================================================================
# Session Tokens
# ============================================================================


def issue_token(
    user_id: str,
    settings: Optional[AuthConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Sign a session token for a user

    The payload carries the user ID in `id` and an `exp` claim derived from
    `token_expire_minutes`.
    """
    settings = settings or get_config().auth
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Optional[AuthConfig] = None) -> Optional[str]:
    """
    Verify signature and expiry; return the user ID or None

    Unsigned, tampered, expired or malformed tokens all yield None.
    """
    settings = settings or get_config().auth
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id"]},
        )
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected session token: {e}")
        return None

    user_id = payload.get("id")
    return user_id if isinstance(user_id, str) and user_id else None


class JwtTokenResolver:
    """Default IdentityResolver: verifies the token, then loads the user"""

    def __init__(self, session: AsyncSession, settings: Optional[AuthConfig] = None):
        self.users = UserRepository(session)
        self.settings = settings

    async def resolve(self, token: str) -> Optional[User]:
        token = (token or "").strip()
        if not token:
            return None

        user_id = decode_token(token, self.settings)
        if user_id is None:
            return None

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.debug(f"Token for unknown user {user_id}")
        return user


# ============================================================================
# Sign-in Verification
# ============================================================================


class RejectingVerifier:
    """
    IdentityVerifier used until a provider is configured

    Every credential is refused. Deployments override `get_identity_verifier`
    with a verifier for their provider (e.g. Google ID tokens).
    """

    async def verify(self, credential: str) -> Optional[VerifiedIdentity]:
        logger.warning("Sign-in attempted but no identity provider is configured")
        return None
