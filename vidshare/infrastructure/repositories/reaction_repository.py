"""
Reaction Repository
Like/dislike rows with an atomic toggle
"""

from typing import Dict, List, Optional
from sqlalchemy import select, delete
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base import BaseRepository
from vidshare.app.models import VideoLike
from vidshare.domain.models import Polarity, ReactionState

logger = logging.getLogger(__name__)


class ReactionRepository(BaseRepository[VideoLike]):
    """
    Repository for VideoLike rows

    Relies on the unique (user_id, video_id) constraint: the toggle is a
    conditional delete followed by an upsert on that key, in one transaction.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, VideoLike)

    # ========================================================================
    # Toggle
    # ========================================================================

    async def toggle(
        self, user_id: str, video_id: str, polarity: Polarity
    ) -> ReactionState:
        """
        Toggle a reaction of the given polarity

        - same polarity stored: the row is removed
        - opposite polarity stored: the row is flipped in place
        - nothing stored: a row is inserted

        Args:
            user_id: Reacting user
            video_id: Target video
            polarity: Polarity.LIKE or Polarity.DISLIKE

        Returns:
            The resulting ReactionState
        """
        value = int(polarity)
        try:
            removed = await self.session.execute(
                delete(VideoLike).where(
                    VideoLike.user_id == user_id,
                    VideoLike.video_id == video_id,
                    VideoLike.like == value,
                )
            )
            if removed.rowcount:
                state = ReactionState.NONE
            else:
                await self.session.execute(
                    self._upsert_statement(user_id, video_id, value)
                )
                state = ReactionState.from_polarity(value)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to toggle reaction on {video_id}: {e}")
            raise

        logger.info(f"✅ Reaction {user_id} -> {video_id}: {state.value}")
        return state

    def _upsert_statement(self, user_id: str, video_id: str, value: int):
        """INSERT ... ON CONFLICT (user_id, video_id) DO UPDATE SET like = value"""
        dialect = self.session.get_bind().dialect.name
        values = {"user_id": user_id, "video_id": video_id, "like": value}

        if dialect == "sqlite":
            stmt = sqlite.insert(VideoLike).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=["user_id", "video_id"], set_={"like": value}
            )
        if dialect == "postgresql":
            stmt = postgresql.insert(VideoLike).values(**values)
            return stmt.on_conflict_do_update(
                constraint="uq_video_likes_user_video", set_={"like": value}
            )
        if dialect in ("mysql", "mariadb"):
            stmt = mysql.insert(VideoLike).values(**values)
            return stmt.on_duplicate_key_update(like=value)

        raise NotImplementedError(f"No atomic reaction upsert for dialect {dialect}")

    # ========================================================================
    # Reads
    # ========================================================================

    async def get_polarity(self, user_id: str, video_id: str) -> Optional[int]:
        """Stored polarity for (user, video), or None"""
        try:
            result = await self.session.execute(
                select(VideoLike.like).where(
                    VideoLike.user_id == user_id, VideoLike.video_id == video_id
                )
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"❌ Failed to read reaction: {e}")
            raise

    async def count_for_video(self, video_id: str, polarity: Polarity) -> int:
        """Number of reactions of one polarity on a video"""
        return await self.count(video_id=video_id, like=int(polarity))

    async def count_by_videos(
        self, video_ids: List[str], polarity: Polarity
    ) -> Dict[str, int]:
        return await self._count_grouped(
            VideoLike.video_id, video_ids, VideoLike.like == int(polarity)
        )

    async def polarities_for_user(
        self, user_id: str, video_ids: List[str]
    ) -> Dict[str, int]:
        """Map video ID -> polarity for the videos this user reacted to"""
        if not video_ids:
            return {}
        try:
            result = await self.session.execute(
                select(VideoLike.video_id, VideoLike.like).where(
                    VideoLike.user_id == user_id, VideoLike.video_id.in_(video_ids)
                )
            )
            return {video_id: like for video_id, like in result.all()}
        except Exception as e:
            logger.error(f"❌ Failed to read user reactions: {e}")
            raise
