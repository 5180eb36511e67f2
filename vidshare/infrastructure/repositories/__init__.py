"""
Repository Layer
Data access patterns for all entities
"""

from .base import BaseRepository
from .user_repository import UserRepository
from .video_repository import VideoRepository
from .comment_repository import CommentRepository
from .reaction_repository import ReactionRepository
from .view_repository import ViewRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "VideoRepository",
    "CommentRepository",
    "ReactionRepository",
    "ViewRepository",
    "SubscriptionRepository",
]
