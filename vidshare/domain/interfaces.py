"""
Domain-facing repository interfaces (Protocols).

Services receive these at construction time, so any object with the same
async methods (the SQLAlchemy repositories, or a test double) can back them.
There is no inheritance requirement.
"""
from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    List,
    Optional,
    Protocol,
    Set,
    runtime_checkable,
)

from vidshare.domain.models import Polarity, ReactionState, VerifiedIdentity

if TYPE_CHECKING:
    from vidshare.app.models import Comment, User, Video


@runtime_checkable
class IUserRepository(Protocol):
    """Interface for user lookups"""

    async def get_by_id(self, user_id: str) -> Optional["User"]: ...

    async def get_by_email(self, email: str) -> Optional["User"]: ...

    async def get_many(self, user_ids: Iterable[str]) -> List["User"]: ...

    async def create(self, **values: Any) -> "User": ...


@runtime_checkable
class IVideoRepository(Protocol):
    """Interface for video persistence/query operations"""

    async def get_by_id(self, video_id: str) -> Optional["Video"]: ...

    async def exists(self, video_id: str) -> bool: ...

    async def get_recent(self) -> List["Video"]:
        """All videos, newest first."""
        ...

    async def search(self, query: str) -> List["Video"]:
        """Case-insensitive substring match on title or description."""
        ...

    async def create(self, **values: Any) -> "Video": ...

    async def delete_with_dependents(self, video_id: str) -> bool:
        """Remove the video plus its views, reactions and comments atomically."""
        ...


@runtime_checkable
class ICommentRepository(Protocol):
    """Interface for comment persistence/query operations"""

    async def get_by_id(self, comment_id: str) -> Optional["Comment"]: ...

    async def get_by_video(self, video_id: str) -> List["Comment"]: ...

    async def count_by_videos(self, video_ids: List[str]) -> Dict[str, int]: ...

    async def create(self, **values: Any) -> "Comment": ...

    async def delete(self, comment_id: str) -> bool: ...


@runtime_checkable
class IReactionRepository(Protocol):
    """
    Reaction store

    `toggle` must run as one atomic unit keyed by the (user_id, video_id)
    uniqueness constraint.
    """

    async def toggle(
        self, user_id: str, video_id: str, polarity: Polarity
    ) -> ReactionState: ...

    async def get_polarity(self, user_id: str, video_id: str) -> Optional[int]: ...

    async def count_for_video(self, video_id: str, polarity: Polarity) -> int: ...

    async def count_by_videos(
        self, video_ids: List[str], polarity: Polarity
    ) -> Dict[str, int]: ...

    async def polarities_for_user(
        self, user_id: str, video_ids: List[str]
    ) -> Dict[str, int]: ...


@runtime_checkable
class IViewRepository(Protocol):
    """Append-only view log"""

    async def add(self, video_id: str, user_id: Optional[str] = None) -> Any: ...

    async def has_viewed(self, user_id: str, video_id: str) -> bool: ...

    async def count_for_video(self, video_id: str) -> int: ...

    async def count_by_videos(self, video_ids: List[str]) -> Dict[str, int]: ...

    async def viewed_video_ids(
        self, user_id: str, video_ids: List[str]
    ) -> Set[str]: ...


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """Directed subscriber -> channel relation"""

    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool: ...

    async def count_subscribers(self, channel_id: str) -> int: ...

    async def subscribed_channel_ids(
        self, subscriber_id: str, channel_ids: Iterable[str]
    ) -> Set[str]: ...

    async def get_channel_ids(self, subscriber_id: str) -> List[str]: ...

    async def toggle(self, subscriber_id: str, channel_id: str) -> bool: ...


@runtime_checkable
class IdentityResolver(Protocol):
    """Maps a session token to a user; unverifiable tokens resolve to None"""

    async def resolve(self, token: str) -> Optional["User"]: ...


@runtime_checkable
class IdentityVerifier(Protocol):
    """
    Checks an external sign-in credential (e.g. a Google ID token)

    Returns the asserted profile, or None when the credential is rejected.
    """

    async def verify(self, credential: str) -> Optional[VerifiedIdentity]: ...
