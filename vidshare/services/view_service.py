"""
View Service
Records views and answers count/seen queries
"""

from typing import Optional

from vidshare.domain.interfaces import IVideoRepository, IViewRepository
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import ResourceNotFoundError


class ViewService(BaseService):
    """View recorder; every call to record_view adds a row"""

    def __init__(
        self,
        video_repo: IVideoRepository,
        view_repo: IViewRepository,
        config=None,
    ):
        super().__init__(config=config)
        self.video_repo = video_repo
        self.view_repo = view_repo

    def get_service_name(self) -> str:
        return "view"

    async def record_view(self, video_id: str, user_id: Optional[str] = None) -> None:
        """
        Append a view for the video

        Args:
            video_id: Viewed video
            user_id: Viewer, None for anonymous callers

        Raises:
            ResourceNotFoundError: Video does not exist
        """
        if not await self.video_repo.exists(video_id):
            raise ResourceNotFoundError("Video", video_id)

        await self.view_repo.add(video_id, user_id)
        self.log_debug(f"View recorded on {video_id} (user={user_id or 'anonymous'})")

    async def has_viewed(self, user_id: str, video_id: str) -> bool:
        return await self.view_repo.has_viewed(user_id, video_id)

    async def view_count(self, video_id: str) -> int:
        return await self.view_repo.count_for_video(video_id)
