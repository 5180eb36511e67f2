"""
API Schemas
Pydantic request/response models; JSON keys are camelCase
"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vidshare.domain.models import EngagementCounts, ViewerFlags


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Users
# ============================================================================


class UserResponse(CamelModel):
    id: str
    email: str
    username: str
    avatar: Optional[str] = None
    cover: Optional[str] = None
    about: Optional[str] = None
    created_at: Optional[datetime] = None


class MeResponse(UserResponse):
    """Authenticated user with the channels they follow"""

    channels: List[UserResponse] = Field(default_factory=list)


# ============================================================================
# Sign-in
# ============================================================================


class SignInRequest(CamelModel):
    """External credential, e.g. a Google ID token, sent as `idToken`"""

    id_token: str = Field(..., description="Identity provider credential")


class SignInResponse(BaseModel):
    token: str


# ============================================================================
# Comments
# ============================================================================


class CommentCreateRequest(BaseModel):
    text: str = Field(..., description="Comment body")


class CommentResponse(CamelModel):
    id: str
    video_id: str
    user_id: str
    text: str
    created_at: Optional[datetime] = None
    user: Optional[UserResponse] = None


# ============================================================================
# Videos
# ============================================================================


class VideoCreateRequest(BaseModel):
    title: str = Field(..., description="Video title")
    description: Optional[str] = Field(default=None, description="Video description")
    url: str = Field(..., description="Media URL")
    thumbnail: Optional[str] = Field(default=None, description="Thumbnail URL")


class VideoResponse(CamelModel):
    """Video metadata enriched with engagement counters and caller flags"""

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    url: str
    thumbnail: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserResponse] = None

    view_count: int = 0
    like_count: int = 0
    dislike_count: int = 0
    comments_count: int = 0

    is_liked: bool = False
    is_disliked: bool = False
    is_subscribed: bool = False
    is_viewed: bool = False
    is_video_mine: bool = False


class VideoDetailResponse(VideoResponse):
    """Single-video payload"""

    subscribers_count: int = 0
    comments: List[CommentResponse] = Field(default_factory=list)


# ============================================================================
# Envelopes
# ============================================================================


class VideoListEnvelope(BaseModel):
    videos: List[VideoResponse]


class VideoEnvelope(BaseModel):
    video: VideoDetailResponse


class CreatedVideoEnvelope(BaseModel):
    video: VideoResponse


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class UserEnvelope(BaseModel):
    user: MeResponse


class SubscriptionStateResponse(CamelModel):
    channel_id: str
    is_subscribed: bool
    subscribers_count: int


# ============================================================================
# Conversion Helpers
# ============================================================================


def user_model_to_response(user) -> Optional[UserResponse]:
    if user is None:
        return None
    return UserResponse.model_validate(user)


def comment_model_to_response(comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        video_id=comment.video_id,
        user_id=comment.user_id,
        text=comment.text,
        created_at=comment.created_at,
        user=user_model_to_response(getattr(comment, "user", None)),
    )


def video_model_to_response(
    video,
    counts: Optional[EngagementCounts] = None,
    flags: Optional[ViewerFlags] = None,
    response_cls: type = VideoResponse,
    **extra,
) -> VideoResponse:
    """
    Build a video payload from an ORM row plus computed engagement

    Args:
        video: Video ORM instance (or any object with the same attributes)
        counts: Aggregated counters, zeros when omitted
        flags: Caller flags, all False when omitted
        response_cls: VideoResponse or VideoDetailResponse
        **extra: Additional fields for response_cls
    """
    counts = counts or EngagementCounts()
    flags = flags or ViewerFlags()
    return response_cls(
        id=video.id,
        user_id=video.user_id,
        title=video.title,
        description=video.description,
        url=video.url,
        thumbnail=video.thumbnail,
        created_at=video.created_at,
        user=user_model_to_response(getattr(video, "user", None)),
        view_count=counts.views,
        like_count=counts.likes,
        dislike_count=counts.dislikes,
        comments_count=counts.comments,
        **asdict(flags),
        **extra,
    )
