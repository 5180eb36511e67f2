"""
Comment Service
Adding comments and author-only deletion
"""

from vidshare.app.models import Comment, User
from vidshare.domain.interfaces import ICommentRepository, IVideoRepository
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import (
    PermissionDeniedError,
    ResourceNotFoundError,
)


class CommentService(BaseService):
    """Comment CRUD gated by the ownership guard"""

    def __init__(
        self,
        video_repo: IVideoRepository,
        comment_repo: ICommentRepository,
        config=None,
    ):
        super().__init__(config=config)
        self.video_repo = video_repo
        self.comment_repo = comment_repo

    def get_service_name(self) -> str:
        return "comment"

    @staticmethod
    def can_delete(requester: User, comment: Comment) -> bool:
        """Only the author may delete a comment"""
        return requester is not None and requester.id == comment.user_id

    async def add_comment(self, video_id: str, user: User, text: str) -> Comment:
        """
        Add a comment to a video

        Raises:
            ValidationError: Blank text
            ResourceNotFoundError: Video does not exist
        """
        self.validate_required(text, "text")

        if not await self.video_repo.exists(video_id):
            raise ResourceNotFoundError("Video", video_id)

        comment = await self.comment_repo.create(
            video_id=video_id, user_id=user.id, text=text
        )
        self.log_info(f"Comment {comment.id} added to {video_id} by {user.id}")
        return comment

    async def delete_comment(
        self, video_id: str, comment_id: str, requester: User
    ) -> None:
        """
        Delete a comment

        Raises:
            ResourceNotFoundError: No such comment on this video
            PermissionDeniedError: Requester is not the author
        """
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None or comment.video_id != video_id:
            raise ResourceNotFoundError("Comment", comment_id)

        if not self.can_delete(requester, comment):
            raise PermissionDeniedError(
                "You are not authorized to delete this comment"
            )

        await self.comment_repo.delete(comment_id)
        self.log_info(f"Comment {comment_id} deleted by {requester.id}")
