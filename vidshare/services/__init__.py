"""
Services Package
Business logic layer for vidshare
"""

from .base_service import BaseService
from .comment_service import CommentService
from .feed_service import FeedService
from .reaction_service import ReactionService
from .subscription_service import SubscriptionService
from .user_service import UserService
from .video_service import VideoService
from .view_service import ViewService
from .exceptions import (
    # Base
    ServiceError,

    # Resource Errors
    ResourceNotFoundError,

    # Validation Errors
    ValidationError,

    # Permission Errors
    AuthenticationRequiredError,
    PermissionDeniedError,

    # Database Errors
    DatabaseError,
    TransactionError,

    # Utility Functions
    error_to_http_status,
)

__all__ = [
    # Base Classes
    "BaseService",

    # Services
    "CommentService",
    "FeedService",
    "ReactionService",
    "SubscriptionService",
    "UserService",
    "VideoService",
    "ViewService",

    # Exceptions
    "ServiceError",
    "ResourceNotFoundError",
    "ValidationError",
    "AuthenticationRequiredError",
    "PermissionDeniedError",
    "DatabaseError",
    "TransactionError",

    # Utility Functions
    "error_to_http_status",
]

# Package metadata
__version__ = "0.1.0"
__description__ = "Service layer for vidshare"
