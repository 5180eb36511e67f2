"""
Subscription Service
Subscriber -> channel graph queries, plus the plain subscribe toggle
"""

from typing import List

from vidshare.app.models import User
from vidshare.domain.interfaces import ISubscriptionRepository, IUserRepository
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import ResourceNotFoundError, ValidationError


class SubscriptionService(BaseService):
    """Reads the subscription graph to enrich videos and users"""

    def __init__(
        self,
        subscription_repo: ISubscriptionRepository,
        user_repo: IUserRepository,
        config=None,
    ):
        super().__init__(config=config)
        self.subscription_repo = subscription_repo
        self.user_repo = user_repo

    def get_service_name(self) -> str:
        return "subscription"

    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool:
        return await self.subscription_repo.is_subscribed(subscriber_id, channel_id)

    async def subscriber_count(self, channel_id: str) -> int:
        return await self.subscription_repo.count_subscribers(channel_id)

    async def get_channels(self, subscriber_id: str) -> List[User]:
        """Users the subscriber follows, most recent subscription first"""
        channel_ids = await self.subscription_repo.get_channel_ids(subscriber_id)
        if not channel_ids:
            return []

        users = {user.id: user for user in await self.user_repo.get_many(channel_ids)}
        return [users[cid] for cid in channel_ids if cid in users]

    async def toggle_subscription(self, subscriber_id: str, channel_id: str) -> bool:
        """
        Subscribe to or unsubscribe from a channel

        Returns:
            True when subscribed afterwards

        Raises:
            ValidationError: Subscribing to yourself
            ResourceNotFoundError: Channel user does not exist
        """
        if subscriber_id == channel_id:
            raise ValidationError("You cannot subscribe to your own channel")

        if await self.user_repo.get_by_id(channel_id) is None:
            raise ResourceNotFoundError("User", channel_id)

        subscribed = await self.subscription_repo.toggle(subscriber_id, channel_id)
        self.log_info(
            f"{subscriber_id} {'subscribed to' if subscribed else 'unsubscribed from'} "
            f"{channel_id}"
        )
        return subscribed
