"""
Video API Router
Listings, single video, reactions, views and comments
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.schemas import (
    CommentCreateRequest,
    CommentEnvelope,
    CreatedVideoEnvelope,
    VideoCreateRequest,
    VideoEnvelope,
    VideoListEnvelope,
    comment_model_to_response,
    video_model_to_response,
)
from vidshare.app.dependencies import (
    get_comment_service,
    get_current_user,
    get_feed_service,
    get_reaction_service,
    get_video_service,
    get_view_service,
    require_user,
)
from vidshare.app.models import User
from vidshare.services import (
    CommentService,
    FeedService,
    ReactionService,
    VideoService,
    ViewService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["Videos"])


# ============================================================================
# Listings
# ============================================================================


@router.get("", response_model=VideoListEnvelope)
async def get_recommended_videos(
    user: Optional[User] = Depends(get_current_user),
    feed: FeedService = Depends(get_feed_service),
):
    """All videos, newest first"""
    return VideoListEnvelope(videos=await feed.get_recommended(user))


@router.get("/trending", response_model=VideoListEnvelope)
async def get_trending_videos(
    user: Optional[User] = Depends(get_current_user),
    feed: FeedService = Depends(get_feed_service),
):
    """All videos, most viewed first"""
    return VideoListEnvelope(videos=await feed.get_trending(user))


@router.get("/search", response_model=VideoListEnvelope)
async def search_videos(
    find: Optional[str] = Query(None, description="Substring of title or description"),
    user: Optional[User] = Depends(get_current_user),
    feed: FeedService = Depends(get_feed_service),
):
    """Case-insensitive search over title and description"""
    return VideoListEnvelope(videos=await feed.search(find, user))


@router.post("", response_model=CreatedVideoEnvelope)
async def add_video(
    request: VideoCreateRequest,
    user: User = Depends(require_user),
    videos: VideoService = Depends(get_video_service),
):
    video = await videos.create_video(
        owner=user,
        title=request.title,
        url=request.url,
        description=request.description,
        thumbnail=request.thumbnail,
    )
    return CreatedVideoEnvelope(video=video_model_to_response(video))


# ============================================================================
# Single Video
# ============================================================================


@router.get("/{video_id}", response_model=VideoEnvelope)
async def get_video(
    video_id: str,
    user: Optional[User] = Depends(get_current_user),
    feed: FeedService = Depends(get_feed_service),
):
    """Video with engagement counters, caller flags and comments"""
    return VideoEnvelope(video=await feed.get_video(video_id, user))


@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    user: User = Depends(require_user),
    videos: VideoService = Depends(get_video_service),
):
    """Owner-only; removes views, reactions and comments too"""
    await videos.delete_video(video_id, user)
    return {}


# ============================================================================
# Engagement
# ============================================================================


@router.get("/{video_id}/like")
async def like_video(
    video_id: str,
    user: User = Depends(require_user),
    reactions: ReactionService = Depends(get_reaction_service),
):
    await reactions.like(user.id, video_id)
    return {}


@router.get("/{video_id}/dislike")
async def dislike_video(
    video_id: str,
    user: User = Depends(require_user),
    reactions: ReactionService = Depends(get_reaction_service),
):
    await reactions.dislike(user.id, video_id)
    return {}


@router.get("/{video_id}/view")
async def add_video_view(
    video_id: str,
    user: Optional[User] = Depends(get_current_user),
    views: ViewService = Depends(get_view_service),
):
    """Record a view; anonymous callers are allowed"""
    await views.record_view(video_id, user.id if user else None)
    return {}


# ============================================================================
# Comments
# ============================================================================


@router.post("/{video_id}/comments", response_model=CommentEnvelope)
async def add_comment(
    video_id: str,
    request: CommentCreateRequest,
    user: User = Depends(require_user),
    comments: CommentService = Depends(get_comment_service),
):
    comment = await comments.add_comment(video_id, user, request.text)
    return CommentEnvelope(comment=comment_model_to_response(comment))


@router.delete("/{video_id}/comments/{comment_id}")
async def delete_comment(
    video_id: str,
    comment_id: str,
    user: User = Depends(require_user),
    comments: CommentService = Depends(get_comment_service),
):
    """Author-only"""
    await comments.delete_comment(video_id, comment_id, user)
    return {}
