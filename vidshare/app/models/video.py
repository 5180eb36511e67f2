"""
Video Model
Represents an uploaded video; engagement is stored in separate tables
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from vidshare.app.database import Base
from ._ids import new_id, utcnow


class Video(Base):
    """
    Uploaded video

    Owned by its creator. Views, reactions and comments reference it and are
    removed together with it.
    """

    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Owner",
    )

    title = Column(String(500), nullable=False, comment="Video title")
    description = Column(Text, comment="Video description")
    url = Column(String(1000), nullable=False, comment="Media URL")
    thumbnail = Column(String(1000), comment="Thumbnail URL")
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Video(id={self.id}, title={(self.title or '')[:30]}...)>"
