"""API routers"""

from .video_router import router as video_router
from .auth_router import router as auth_router
from .user_router import router as user_router

__all__ = ["video_router", "auth_router", "user_router"]
