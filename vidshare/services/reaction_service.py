"""
Reaction Service
Like/dislike toggling with one reaction per (user, video)
"""

from vidshare.domain.interfaces import IReactionRepository, IVideoRepository
from vidshare.domain.models import Polarity, ReactionState
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import ResourceNotFoundError


class ReactionService(BaseService):
    """
    Reaction toggle engine

    Transitions for like (dislike is symmetric):
        NONE     -> LIKED  (insert +1)
        DISLIKED -> LIKED  (flip in place)
        LIKED    -> NONE   (remove)

    Every state has a transition, so toggling never fails on reaction state.
    The store performs each toggle atomically.
    """

    def __init__(
        self,
        video_repo: IVideoRepository,
        reaction_repo: IReactionRepository,
        config=None,
    ):
        super().__init__(config=config)
        self.video_repo = video_repo
        self.reaction_repo = reaction_repo

    def get_service_name(self) -> str:
        return "reaction"

    # ========================================================================
    # Toggles
    # ========================================================================

    async def like(self, user_id: str, video_id: str) -> ReactionState:
        """
        Toggle a like

        Raises:
            ResourceNotFoundError: Video does not exist
        """
        return await self._toggle(user_id, video_id, Polarity.LIKE)

    async def dislike(self, user_id: str, video_id: str) -> ReactionState:
        """
        Toggle a dislike

        Raises:
            ResourceNotFoundError: Video does not exist
        """
        return await self._toggle(user_id, video_id, Polarity.DISLIKE)

    async def _toggle(
        self, user_id: str, video_id: str, polarity: Polarity
    ) -> ReactionState:
        if not await self.video_repo.exists(video_id):
            raise ResourceNotFoundError("Video", video_id)

        state = await self.reaction_repo.toggle(user_id, video_id, polarity)
        self.log_debug(f"{polarity.name.lower()} toggled by {user_id} on {video_id}")
        return state

    # ========================================================================
    # Reads
    # ========================================================================

    async def get_state(self, user_id: str, video_id: str) -> ReactionState:
        polarity = await self.reaction_repo.get_polarity(user_id, video_id)
        return ReactionState.from_polarity(polarity)

    async def is_liked(self, user_id: str, video_id: str) -> bool:
        return await self.get_state(user_id, video_id) == ReactionState.LIKED

    async def is_disliked(self, user_id: str, video_id: str) -> bool:
        return await self.get_state(user_id, video_id) == ReactionState.DISLIKED

    async def like_count(self, video_id: str) -> int:
        return await self.reaction_repo.count_for_video(video_id, Polarity.LIKE)

    async def dislike_count(self, video_id: str) -> int:
        return await self.reaction_repo.count_for_video(video_id, Polarity.DISLIKE)
