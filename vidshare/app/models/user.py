"""
User Model
A platform account; also acts as a channel others can subscribe to
"""

from sqlalchemy import Column, String, DateTime, Text

from vidshare.app.database import Base
from ._ids import new_id, utcnow


class User(Base):
    """Registered user, created on first verified sign-in"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(
        String(255), nullable=False, unique=True, index=True, comment="Login email"
    )
    username = Column(String(255), nullable=False, comment="Display name")
    avatar = Column(String(1000), comment="Avatar URL")
    cover = Column(String(1000), comment="Channel cover image URL")
    about = Column(Text, comment="Channel description")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
