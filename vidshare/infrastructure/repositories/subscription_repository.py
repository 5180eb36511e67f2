"""
Subscription Repository
Directed subscriber -> channel relation
"""

from typing import Iterable, List, Set
from sqlalchemy import select, delete, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from vidshare.app.models import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for Subscription rows"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Subscription)

    # ========================================================================
    # Reads
    # ========================================================================

    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool:
        total = await self.count(
            subscriber_id=subscriber_id, subscribed_to_id=channel_id
        )
        return total > 0

    async def count_subscribers(self, channel_id: str) -> int:
        return await self.count(subscribed_to_id=channel_id)

    async def subscribed_channel_ids(
        self, subscriber_id: str, channel_ids: Iterable[str]
    ) -> Set[str]:
        """Subset of `channel_ids` the subscriber follows"""
        channel_ids = list(set(channel_ids))
        if not channel_ids:
            return set()
        try:
            result = await self.session.execute(
                select(Subscription.subscribed_to_id).where(
                    Subscription.subscriber_id == subscriber_id,
                    Subscription.subscribed_to_id.in_(channel_ids),
                )
            )
            return set(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to read subscriptions: {e}")
            raise

    async def get_channel_ids(self, subscriber_id: str) -> List[str]:
        """Channels followed by the subscriber, most recent first"""
        try:
            result = await self.session.execute(
                select(Subscription.subscribed_to_id)
                .where(Subscription.subscriber_id == subscriber_id)
                .order_by(desc(Subscription.created_at))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to list subscriptions: {e}")
            raise

    # ========================================================================
    # Writes
    # ========================================================================

    async def toggle(self, subscriber_id: str, channel_id: str) -> bool:
        """
        Subscribe if not subscribed, otherwise unsubscribe

        Returns:
            True when the subscriber is subscribed afterwards
        """
        try:
            removed = await self.session.execute(
                delete(Subscription).where(
                    Subscription.subscriber_id == subscriber_id,
                    Subscription.subscribed_to_id == channel_id,
                )
            )
            if removed.rowcount:
                await self.session.commit()
                logger.info(f"✅ {subscriber_id} unsubscribed from {channel_id}")
                return False

            self.session.add(
                Subscription(subscriber_id=subscriber_id, subscribed_to_id=channel_id)
            )
            await self.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            await self.session.rollback()
            logger.warning(f"⚠️ Subscription {subscriber_id} -> {channel_id} exists")
            return True
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to toggle subscription: {e}")
            raise

        logger.info(f"✅ {subscriber_id} subscribed to {channel_id}")
        return True
