"""
Auth API Router
Sign-in, current user and sign-out
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from vidshare.api.schemas import (
    MeResponse,
    SignInRequest,
    SignInResponse,
    UserEnvelope,
    UserResponse,
)
from vidshare.app.config import get_config
from vidshare.app.dependencies import (
    get_identity_verifier,
    get_subscription_service,
    get_user_service,
    require_user,
)
from vidshare.app.models import User
from vidshare.domain.interfaces import IdentityVerifier
from vidshare.infrastructure.identity import issue_token
from vidshare.services import (
    AuthenticationRequiredError,
    SubscriptionService,
    UserService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=SignInResponse)
async def login(
    request: SignInRequest,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    users: UserService = Depends(get_user_service),
):
    """
    Exchange a provider credential for a session token

    The account is created on first sign-in. The token is returned in the
    body and set as an httpOnly cookie.
    """
    identity = await verifier.verify(request.id_token)
    if identity is None:
        raise AuthenticationRequiredError("Invalid sign-in credential")

    user = await users.get_or_create(
        email=identity.email, username=identity.username, avatar=identity.avatar
    )

    auth = get_config().auth
    token = issue_token(user.id, auth)
    logger.info(f"🔑 User {user.id} signed in")

    response = JSONResponse(content=SignInResponse(token=token).model_dump())
    response.set_cookie(
        auth.cookie_name,
        token,
        max_age=auth.token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/me", response_model=UserEnvelope)
async def me(
    user: User = Depends(require_user),
    subscriptions: SubscriptionService = Depends(get_subscription_service),
):
    """Authenticated user with the channels they subscribe to"""
    channels = await subscriptions.get_channels(user.id)
    profile = UserResponse.model_validate(user).model_dump()
    return UserEnvelope(
        user=MeResponse(
            **profile,
            channels=[UserResponse.model_validate(c) for c in channels],
        )
    )


@router.get("/signout")
async def signout():
    response = JSONResponse(content={})
    response.delete_cookie(get_config().auth.cookie_name)
    return response
