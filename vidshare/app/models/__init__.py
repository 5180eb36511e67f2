"""
ORM Models
Users, videos, comments and engagement records
"""

from vidshare.app.database import Base
from .user import User
from .video import Video
from .comment import Comment
from .engagement import View, VideoLike, Subscription

__all__ = [
    "Base",
    "User",
    "Video",
    "Comment",
    "View",
    "VideoLike",
    "Subscription",
]
