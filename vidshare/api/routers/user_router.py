"""
User API Router
Channel subscription toggle
"""

from fastapi import APIRouter, Depends

from vidshare.api.schemas import SubscriptionStateResponse
from vidshare.app.dependencies import get_subscription_service, require_user
from vidshare.app.models import User
from vidshare.services import SubscriptionService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}/togglesubscribe")
async def toggle_subscribe(
    user_id: str,
    user: User = Depends(require_user),
    subscriptions: SubscriptionService = Depends(get_subscription_service),
):
    subscribed = await subscriptions.toggle_subscription(user.id, user_id)
    state = SubscriptionStateResponse(
        channel_id=user_id,
        is_subscribed=subscribed,
        subscribers_count=await subscriptions.subscriber_count(user_id),
    )
    return {"subscription": state.model_dump(by_alias=True)}
