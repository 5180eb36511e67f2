"""
Domain value types

Small enums and DTOs shared by services. These are not DB models; the ORM
entities live in vidshare.app.models.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass


class Polarity(enum.IntEnum):
    """Stored value of a reaction row"""

    LIKE = 1
    DISLIKE = -1


class ReactionState(str, enum.Enum):
    """Reaction of one user to one video"""

    NONE = "none"
    LIKED = "liked"
    DISLIKED = "disliked"

    @classmethod
    def from_polarity(cls, polarity: int | None) -> "ReactionState":
        if polarity == Polarity.LIKE:
            return cls.LIKED
        if polarity == Polarity.DISLIKE:
            return cls.DISLIKED
        return cls.NONE


@dataclass
class EngagementCounts:
    """Aggregated counters for one video"""

    views: int = 0
    likes: int = 0
    dislikes: int = 0
    comments: int = 0


@dataclass
class ViewerFlags:
    """Per-caller booleans; all False for anonymous callers"""

    is_liked: bool = False
    is_disliked: bool = False
    is_subscribed: bool = False
    is_viewed: bool = False
    is_video_mine: bool = False


@dataclass(frozen=True)
class VerifiedIdentity:
    """Profile asserted by an identity provider after it checked a credential"""

    email: str
    username: str
    avatar: str | None = None


__all__ = [
    "Polarity",
    "ReactionState",
    "EngagementCounts",
    "ViewerFlags",
    "VerifiedIdentity",
]
