"""
View Repository
Append-only view log
"""

from typing import Dict, List, Optional, Set
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from vidshare.app.models import View

logger = logging.getLogger(__name__)


class ViewRepository(BaseRepository[View]):
    """Repository for View rows; nothing here deduplicates"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, View)

    async def add(self, video_id: str, user_id: Optional[str] = None) -> View:
        """Append one view, anonymous when user_id is None"""
        return await self.create(video_id=video_id, user_id=user_id)

    async def has_viewed(self, user_id: str, video_id: str) -> bool:
        return await self.count(user_id=user_id, video_id=video_id) > 0

    async def count_for_video(self, video_id: str) -> int:
        return await self.count(video_id=video_id)

    async def count_by_videos(self, video_ids: List[str]) -> Dict[str, int]:
        """View count per video ID (anonymous views included)"""
        return await self._count_grouped(View.video_id, video_ids)

    async def viewed_video_ids(self, user_id: str, video_ids: List[str]) -> Set[str]:
        """Subset of `video_ids` this user has viewed at least once"""
        if not video_ids:
            return set()
        try:
            result = await self.session.execute(
                select(View.video_id)
                .where(View.user_id == user_id, View.video_id.in_(video_ids))
                .distinct()
            )
            return set(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to read viewed videos: {e}")
            raise
