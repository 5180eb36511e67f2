"""
Engagement Models
Views, like/dislike reactions and channel subscriptions
"""

from sqlalchemy import (
    Column,
    String,
    SmallInteger,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)

from vidshare.app.database import Base
from ._ids import new_id, utcnow


class View(Base):
    """
    One playback of a video

    Append-only. Anonymous views have no user_id; repeated views by the same
    user are all kept.
    """

    __tablename__ = "views"

    id = Column(String(36), primary_key=True, default=new_id)
    video_id = Column(String(36), ForeignKey("videos.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class VideoLike(Base):
    """
    A user's reaction to a video: like = 1 (like) or -1 (dislike)

    At most one row per (user_id, video_id).
    """

    __tablename__ = "video_likes"

    id = Column(String(36), primary_key=True, default=new_id)
    video_id = Column(String(36), ForeignKey("videos.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    like = Column(SmallInteger, nullable=False, comment="1 = like, -1 = dislike")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_video_likes_user_video"),
        CheckConstraint(like.in_([1, -1]), name="ck_video_likes_polarity"),
    )


class Subscription(Base):
    """subscriber_id follows the channel owned by subscribed_to_id"""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint(
            "subscriber_id", "subscribed_to_id", name="uq_subscriptions_pair"
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    subscriber_id = Column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    subscribed_to_id = Column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
