"""
Video Service
Video creation and owner-only cascading deletion
"""

from typing import Optional

from vidshare.app.models import User, Video
from vidshare.domain.interfaces import IVideoRepository
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import (
    PermissionDeniedError,
    ResourceNotFoundError,
    TransactionError,
)


class VideoService(BaseService):
    """
    Video lifecycle operations

    Listings and enriched reads live in FeedService.
    """

    def __init__(self, video_repo: IVideoRepository, config=None):
        super().__init__(config=config)
        self.video_repo = video_repo

    def get_service_name(self) -> str:
        return "video"

    async def create_video(
        self,
        owner: User,
        title: str,
        url: str,
        description: Optional[str] = None,
        thumbnail: Optional[str] = None,
    ) -> Video:
        """
        Create a video owned by `owner`

        Raises:
            ValidationError: title or url missing
        """
        self.validate_required(title, "title")
        self.validate_required(url, "url")

        video = await self.video_repo.create(
            user_id=owner.id,
            title=title,
            description=description,
            url=url,
            thumbnail=thumbnail,
        )
        self.log_info(f"Video created: {video.id} by {owner.id}")
        return video

    async def delete_video(self, video_id: str, requester: User) -> None:
        """
        Delete video and all views, reactions and comments referencing it

        Args:
            video_id: Video ID
            requester: Authenticated caller; must own the video

        Raises:
            ResourceNotFoundError: Video not found
            PermissionDeniedError: Caller is not the owner
            TransactionError: Cascade failed and was rolled back
        """
        self.log_info(f"Deleting video: {video_id}")

        video = await self.video_repo.get_by_id(video_id)
        if not video:
            raise ResourceNotFoundError("Video", video_id)

        if video.user_id != requester.id:
            raise PermissionDeniedError("You are not authorized to delete this video")

        try:
            await self.video_repo.delete_with_dependents(video_id)
        except Exception as e:
            raise self.handle_error(
                e, "delete_video", {"video_id": video_id}, error_cls=TransactionError
            )

        self.log_info(f"Video deleted successfully: {video_id}")
