"""
Comment Model
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from vidshare.app.database import Base
from ._ids import new_id, utcnow


class Comment(Base):
    """Comment left on a video; only its author may delete it"""

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=new_id)
    video_id = Column(String(36), ForeignKey("videos.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Comment(id={self.id}, video_id={self.video_id})>"
