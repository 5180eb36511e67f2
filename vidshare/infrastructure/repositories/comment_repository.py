"""
Comment Repository
Handles all comment-related database operations
"""

from typing import List, Dict
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from vidshare.app.models import Comment

logger = logging.getLogger(__name__)


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations"""

    def __init__(self, session: AsyncSession):
        """Initialize comment repository"""
        super().__init__(session, Comment)

    async def create(self, **kwargs) -> Comment:
        """Create a comment and load its author for serialization"""
        comment = await super().create(**kwargs)
        await self.session.refresh(comment, attribute_names=["user"])
        return comment

    async def get_by_video(self, video_id: str) -> List[Comment]:
        """
        Get all comments for a video

        Args:
            video_id: Video ID

        Returns:
            Comments (authors loaded) ordered newest first
        """
        try:
            result = await self.session.execute(
                select(Comment)
                .where(Comment.video_id == video_id)
                .order_by(desc(Comment.created_at))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get comments by video: {e}")
            raise

    async def count_by_videos(self, video_ids: List[str]) -> Dict[str, int]:
        """Comment count per video ID"""
        return await self._count_grouped(Comment.video_id, video_ids)
