"""
Feed Service
Composes recommended, trending and search listings and the single-video page
"""

from typing import Dict, List, Optional

from vidshare.api.schemas import (
    VideoDetailResponse,
    VideoResponse,
    comment_model_to_response,
    video_model_to_response,
)
from vidshare.app.models import User, Video
from vidshare.domain.interfaces import (
    ICommentRepository,
    IReactionRepository,
    ISubscriptionRepository,
    IVideoRepository,
    IViewRepository,
)
from vidshare.domain.models import EngagementCounts, Polarity, ViewerFlags
from vidshare.services.base_service import BaseService
from vidshare.services.exceptions import ResourceNotFoundError, ValidationError


class FeedService(BaseService):
    """
    Feed aggregator

    Handles:
    - Recommended listing (newest first)
    - Trending listing (most viewed first)
    - Substring search over title/description
    - Single video with comments and caller-specific flags

    Counters for a listing are fetched with one grouped query per counter over
    the whole page, never per video.
    """

    def __init__(
        self,
        video_repo: IVideoRepository,
        comment_repo: ICommentRepository,
        reaction_repo: IReactionRepository,
        view_repo: IViewRepository,
        subscription_repo: ISubscriptionRepository,
        config=None,
    ):
        super().__init__(config=config)
        self.video_repo = video_repo
        self.comment_repo = comment_repo
        self.reaction_repo = reaction_repo
        self.view_repo = view_repo
        self.subscription_repo = subscription_repo

    def get_service_name(self) -> str:
        return "feed"

    # ========================================================================
    # Listings
    # ========================================================================

    async def get_recommended(
        self, viewer: Optional[User] = None
    ) -> List[VideoResponse]:
        """All videos, newest first"""
        videos = await self.video_repo.get_recent()
        return await self.enrich(videos, viewer)

    async def get_trending(self, viewer: Optional[User] = None) -> List[VideoResponse]:
        """
        All videos ordered by view count, highest first

        The sort is stable, so videos with equal counts keep recency order.
        """
        videos = await self.video_repo.get_recent()
        enriched = await self.enrich(videos, viewer)
        return sorted(enriched, key=lambda item: item.view_count, reverse=True)

    async def search(
        self, query: Optional[str], viewer: Optional[User] = None
    ) -> List[VideoResponse]:
        """
        Videos whose title or description contains `query`, ignoring case

        Raises:
            ValidationError: Missing or blank query
        """
        if query is None or not query.strip():
            raise ValidationError("Please enter a valid search query", field="find")

        self.log_info(f"Searching videos with query: {query}")
        videos = await self.video_repo.search(query)
        return await self.enrich(videos, viewer)

    # ========================================================================
    # Single Video
    # ========================================================================

    async def get_video(
        self, video_id: str, viewer: Optional[User] = None
    ) -> VideoDetailResponse:
        """
        Video with counters, owner subscriber count and comments (newest first)

        Raises:
            ResourceNotFoundError: Video not found
        """
        video = await self.video_repo.get_by_id(video_id)
        if not video:
            raise ResourceNotFoundError("Video", video_id)

        comments = await self.comment_repo.get_by_video(video_id)
        counts = EngagementCounts(
            views=await self.view_repo.count_for_video(video_id),
            likes=await self.reaction_repo.count_for_video(video_id, Polarity.LIKE),
            dislikes=await self.reaction_repo.count_for_video(
                video_id, Polarity.DISLIKE
            ),
            comments=len(comments),
        )

        flags = ViewerFlags()
        if viewer is not None:
            polarity = await self.reaction_repo.get_polarity(viewer.id, video_id)
            flags = ViewerFlags(
                is_liked=polarity == Polarity.LIKE,
                is_disliked=polarity == Polarity.DISLIKE,
                is_subscribed=await self.subscription_repo.is_subscribed(
                    viewer.id, video.user_id
                ),
                is_viewed=await self.view_repo.has_viewed(viewer.id, video_id),
                is_video_mine=viewer.id == video.user_id,
            )

        return video_model_to_response(
            video,
            counts,
            flags,
            response_cls=VideoDetailResponse,
            subscribers_count=await self.subscription_repo.count_subscribers(
                video.user_id
            ),
            comments=[comment_model_to_response(c) for c in comments],
        )

    # ========================================================================
    # Enrichment
    # ========================================================================

    async def enrich(
        self, videos: List[Video], viewer: Optional[User] = None
    ) -> List[VideoResponse]:
        """
        Attach counters and caller flags to each video, preserving order

        An empty list returns immediately without touching the store.
        """
        if not videos:
            return []

        video_ids = [video.id for video in videos]
        views = await self.view_repo.count_by_videos(video_ids)
        likes = await self.reaction_repo.count_by_videos(video_ids, Polarity.LIKE)
        dislikes = await self.reaction_repo.count_by_videos(
            video_ids, Polarity.DISLIKE
        )
        comments = await self.comment_repo.count_by_videos(video_ids)

        flags = await self._viewer_flags(videos, viewer)

        return [
            video_model_to_response(
                video,
                EngagementCounts(
                    views=views.get(video.id, 0),
                    likes=likes.get(video.id, 0),
                    dislikes=dislikes.get(video.id, 0),
                    comments=comments.get(video.id, 0),
                ),
                flags.get(video.id),
            )
            for video in videos
        ]

    async def _viewer_flags(
        self, videos: List[Video], viewer: Optional[User]
    ) -> Dict[str, ViewerFlags]:
        if viewer is None:
            return {}

        video_ids = [video.id for video in videos]
        polarities = await self.reaction_repo.polarities_for_user(viewer.id, video_ids)
        viewed = await self.view_repo.viewed_video_ids(viewer.id, video_ids)
        subscribed = await self.subscription_repo.subscribed_channel_ids(
            viewer.id, {video.user_id for video in videos}
        )

        return {
            video.id: ViewerFlags(
                is_liked=polarities.get(video.id) == Polarity.LIKE,
                is_disliked=polarities.get(video.id) == Polarity.DISLIKE,
                is_subscribed=video.user_id in subscribed,
                is_viewed=video.id in viewed,
                is_video_mine=video.user_id == viewer.id,
            )
            for video in videos
        }
