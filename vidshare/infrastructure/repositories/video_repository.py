"""
Video Repository
Handles all video-related database operations
"""

from typing import List
from sqlalchemy import String, select, delete, desc, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from vidshare.app.models import Video, View, VideoLike, Comment

logger = logging.getLogger(__name__)


class VideoRepository(BaseRepository[Video]):
    """
    Repository for Video operations
    Provides listing, search and cascading delete
    """

    def __init__(self, session: AsyncSession):
        """Initialize video repository"""
        super().__init__(session, Video)

    async def create(self, **kwargs) -> Video:
        """Create a video and load its owner for serialization"""
        video = await super().create(**kwargs)
        await self.session.refresh(video, attribute_names=["user"])
        return video

    # ========================================================================
    # Video Retrieval Methods
    # ========================================================================

    async def get_recent(self) -> List[Video]:
        """
        Get every video, newest first

        Returns:
            List of videos ordered by created_at descending
        """
        try:
            result = await self.session.execute(
                select(Video).order_by(desc(Video.created_at))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get recent videos: {e}")
            raise

    def _contains_ignore_case(self, column, query: str):
        """
        Unicode-aware case-insensitive substring test

        SQLite uses the `casefold` function registered on connect; other
        backends fold case natively with lower()/ILIKE.
        """
        if self.session.get_bind().dialect.name == "sqlite":
            folded = func.casefold(column, type_=String)
            return folded.contains(query.casefold(), autoescape=True)
        return column.icontains(query, autoescape=True)

    async def search(self, query: str) -> List[Video]:
        """
        Search videos by title or description

        Args:
            query: Substring to look for (case-insensitive, wildcards escaped)

        Returns:
            Matching videos, newest first
        """
        try:
            result = await self.session.execute(
                select(Video)
                .where(
                    or_(
                        self._contains_ignore_case(Video.title, query),
                        self._contains_ignore_case(Video.description, query),
                    )
                )
                .order_by(desc(Video.created_at))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to search videos: {e}")
            raise

    # ========================================================================
    # Delete
    # ========================================================================

    async def delete_with_dependents(self, video_id: str) -> bool:
        """
        Delete a video together with its views, reactions and comments

        All statements run in the session's current transaction and are
        committed once; any failure rolls the whole cascade back.

        Args:
            video_id: Video ID

        Returns:
            True if the video row was deleted
        """
        try:
            views = await self.session.execute(
                delete(View).where(View.video_id == video_id)
            )
            reactions = await self.session.execute(
                delete(VideoLike).where(VideoLike.video_id == video_id)
            )
            comments = await self.session.execute(
                delete(Comment).where(Comment.video_id == video_id)
            )
            result = await self.session.execute(
                delete(Video).where(Video.id == video_id)
            )
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Cascade delete rolled back for video {video_id}: {e}")
            raise

        logger.info(
            f"✅ Deleted video {video_id} "
            f"({views.rowcount} views, {reactions.rowcount} reactions, "
            f"{comments.rowcount} comments)"
        )
        return result.rowcount > 0
