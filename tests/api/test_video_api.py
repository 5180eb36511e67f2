"""
API Tests
Routes exercised end-to-end against an in-memory database
"""

import jwt
import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from vidshare.app.database import get_session
from vidshare.app.dependencies import get_identity_verifier
from vidshare.app.main import app
from vidshare.app.models import Comment, User, Video, View
from vidshare.domain.models import VerifiedIdentity
from vidshare.infrastructure.identity import decode_token, issue_token


def auth(user):
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest_asyncio.fixture
async def client(db_session):
    """HTTP client bound to the test session"""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http:
        yield http
    app.dependency_overrides.clear()


# ============================================================================
# Listings
# ============================================================================


@pytest.mark.asyncio
async def test_empty_listing(client):
    response = await client.get("/videos")

    assert response.status_code == 200
    assert response.json() == {"videos": []}


@pytest.mark.asyncio
async def test_listing_uses_camel_case_and_counters(client, users, make_video):
    video = await make_video(users["alice"], "Cat Video")
    await client.get(f"/videos/{video.id}/view")
    await client.get(f"/videos/{video.id}/like", headers=auth(users["bob"]))

    response = await client.get("/videos", headers=auth(users["bob"]))

    (item,) = response.json()["videos"]
    assert item["id"] == video.id
    assert item["viewCount"] == 1
    assert item["likeCount"] == 1
    assert item["dislikeCount"] == 0
    assert item["isLiked"] is True
    assert item["isVideoMine"] is False
    assert item["user"]["username"] == "Alice"


@pytest.mark.asyncio
async def test_trending_orders_by_views(client, users, make_video):
    quiet = await make_video(users["alice"], "Quiet", age_minutes=0)
    loud = await make_video(users["alice"], "Loud", age_minutes=5)
    for _ in range(2):
        await client.get(f"/videos/{loud.id}/view")

    response = await client.get("/videos/trending")

    assert [v["id"] for v in response.json()["videos"]] == [loud.id, quiet.id]


@pytest.mark.asyncio
async def test_search_requires_find(client):
    response = await client.get("/videos/search")

    assert response.status_code == 400
    assert response.json() == {"message": "Please enter a valid search query"}


@pytest.mark.asyncio
async def test_search_matches_description(client, users, make_video):
    await make_video(users["alice"], "Garden", description="two sleepy cats")
    await make_video(users["alice"], "Kitchen")

    response = await client.get("/videos/search", params={"find": "CAT"})

    assert [v["title"] for v in response.json()["videos"]] == ["Garden"]


# ============================================================================
# Single Video
# ============================================================================


@pytest.mark.asyncio
async def test_unknown_video_is_404(client):
    response = await client.get("/videos/nope")

    assert response.status_code == 404
    assert response.json() == {"message": 'No video found with id: "nope"'}


@pytest.mark.asyncio
async def test_single_video_page(client, users, make_video):
    video = await make_video(users["alice"], "Detail")
    await client.get(
        f"/users/{users['alice'].id}/togglesubscribe", headers=auth(users["bob"])
    )
    await client.post(
        f"/videos/{video.id}/comments",
        json={"text": "nice"},
        headers=auth(users["carol"]),
    )

    response = await client.get(f"/videos/{video.id}", headers=auth(users["bob"]))

    body = response.json()["video"]
    assert body["subscribersCount"] == 1
    assert body["isSubscribed"] is True
    assert body["commentsCount"] == 1
    assert body["comments"][0]["text"] == "nice"
    assert body["comments"][0]["user"]["username"] == "Carol"


@pytest.mark.asyncio
async def test_create_video(client, users):
    response = await client.post(
        "/videos",
        json={"title": "Fresh", "url": "https://cdn.example.com/fresh.mp4"},
        headers=auth(users["alice"]),
    )

    assert response.status_code == 200
    video = response.json()["video"]
    assert video["userId"] == users["alice"].id
    assert video["viewCount"] == 0
    assert video["user"]["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_create_video_missing_url(client, users):
    response = await client.post(
        "/videos", json={"title": "No url"}, headers=auth(users["alice"])
    )

    assert response.status_code == 400
    assert "url" in response.json()["message"]


# ============================================================================
# Engagement
# ============================================================================


@pytest.mark.asyncio
async def test_like_requires_login(client, users, make_video):
    video = await make_video(users["alice"], "Locked")

    response = await client.get(f"/videos/{video.id}/like")

    assert response.status_code == 401
    assert response.json() == {
        "message": "You need to be logged in to visit this route"
    }


@pytest.mark.asyncio
async def test_like_toggle_round_trip(client, users, make_video):
    video = await make_video(users["alice"], "Toggle")
    headers = auth(users["bob"])

    await client.get(f"/videos/{video.id}/dislike", headers=headers)
    await client.get(f"/videos/{video.id}/like", headers=headers)
    item = (await client.get(f"/videos/{video.id}", headers=headers)).json()["video"]
    assert (item["likeCount"], item["dislikeCount"]) == (1, 0)

    response = await client.get(f"/videos/{video.id}/like", headers=headers)
    assert response.status_code == 200
    assert response.json() == {}

    item = (await client.get(f"/videos/{video.id}", headers=headers)).json()["video"]
    assert (item["likeCount"], item["isLiked"]) == (0, False)


@pytest.mark.asyncio
async def test_like_unknown_video(client, users):
    response = await client.get("/videos/ghost/like", headers=auth(users["bob"]))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_anonymous_view(client, db_session, users, make_video):
    video = await make_video(users["alice"], "Public")

    response = await client.get(f"/videos/{video.id}/view")

    assert response.status_code == 200
    assert response.json() == {}
    views = (await db_session.execute(select(View))).scalars().all()
    assert [v.user_id for v in views] == [None]


@pytest.mark.asyncio
async def test_cookie_token_identifies_caller(client, db_session, users, make_video):
    video = await make_video(users["alice"], "Cookie")
    client.cookies.set("token", issue_token(users["carol"].id))

    await client.get(f"/videos/{video.id}/view")

    views = (await db_session.execute(select(View))).scalars().all()
    assert [v.user_id for v in views] == [users["carol"].id]


# ============================================================================
# Comments
# ============================================================================


@pytest.mark.asyncio
async def test_comment_delete_guard(client, db_session, users, make_video):
    video = await make_video(users["alice"], "Chatty")
    created = await client.post(
        f"/videos/{video.id}/comments",
        json={"text": "mine"},
        headers=auth(users["bob"]),
    )
    comment_id = created.json()["comment"]["id"]

    denied = await client.delete(
        f"/videos/{video.id}/comments/{comment_id}", headers=auth(users["alice"])
    )
    assert denied.status_code == 401
    assert denied.json() == {"message": "You are not authorized to delete this comment"}

    allowed = await client.delete(
        f"/videos/{video.id}/comments/{comment_id}", headers=auth(users["bob"])
    )
    assert allowed.status_code == 200
    assert await db_session.scalar(select(func.count()).select_from(Comment)) == 0


# ============================================================================
# Video Deletion
# ============================================================================


@pytest.mark.asyncio
async def test_only_owner_deletes_video(client, users, make_video):
    video = await make_video(users["alice"], "Mine")

    response = await client.delete(f"/videos/{video.id}", headers=auth(users["bob"]))

    assert response.status_code == 401
    assert (await client.get(f"/videos/{video.id}")).status_code == 200


@pytest.mark.asyncio
async def test_delete_video_cascades(client, db_session, users, make_video):
    video = await make_video(users["alice"], "Gone")
    await client.get(f"/videos/{video.id}/view", headers=auth(users["bob"]))
    await client.get(f"/videos/{video.id}/like", headers=auth(users["bob"]))
    await client.post(
        f"/videos/{video.id}/comments",
        json={"text": "bye"},
        headers=auth(users["bob"]),
    )

    response = await client.delete(f"/videos/{video.id}", headers=auth(users["alice"]))

    assert response.status_code == 200
    assert (await client.get(f"/videos/{video.id}")).status_code == 404
    assert await db_session.scalar(select(func.count()).select_from(View)) == 0
    assert await db_session.scalar(select(func.count()).select_from(Comment)) == 0


# ============================================================================
# Users / Auth
# ============================================================================


@pytest.mark.asyncio
async def test_toggle_subscribe(client, users):
    path = f"/users/{users['alice'].id}/togglesubscribe"

    first = await client.get(path, headers=auth(users["bob"]))
    assert first.json() == {
        "subscription": {
            "channelId": users["alice"].id,
            "isSubscribed": True,
            "subscribersCount": 1,
        }
    }

    second = await client.get(path, headers=auth(users["bob"]))
    assert second.json()["subscription"]["isSubscribed"] is False


@pytest.mark.asyncio
async def test_cannot_subscribe_to_self(client, users):
    response = await client.get(
        f"/users/{users['alice'].id}/togglesubscribe", headers=auth(users["alice"])
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_me_lists_channels(client, users):
    headers = auth(users["bob"])
    await client.get(f"/users/{users['alice'].id}/togglesubscribe", headers=headers)

    response = await client.get("/auth/me", headers=headers)

    user = response.json()["user"]
    assert user["email"] == "bob@example.com"
    assert [c["username"] for c in user["channels"]] == ["Alice"]


@pytest.mark.asyncio
async def test_me_requires_login(client):
    assert (await client.get("/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_signout_clears_cookie(client):
    response = await client.get("/auth/signout")

    assert response.status_code == 200
    assert response.json() == {}
    assert response.headers["set-cookie"].startswith("token=")


# ============================================================================
# Session Tokens
# ============================================================================


@pytest.mark.asyncio
async def test_raw_user_id_is_not_a_session(client, db_session, users, make_video):
    video = await make_video(users["alice"], "Guarded")
    video_id = video.id
    forged = {"Authorization": f"Bearer {users['alice'].id}"}

    response = await client.delete(f"/videos/{video_id}", headers=forged)

    assert response.status_code == 401
    assert await db_session.scalar(
        select(func.count()).select_from(Video).where(Video.id == video_id)
    ) == 1


@pytest.mark.asyncio
async def test_expired_token_rejected(client, users):
    stale = issue_token(
        users["bob"].id, now=datetime.now(timezone.utc) - timedelta(days=30)
    )

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {stale}"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_rejected(client, users):
    forged = jwt.encode(
        {
            "id": users["bob"].id,
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        "not-the-server-secret",
        algorithm="HS256",
    )

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {forged}"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unverifiable_token_browses_anonymously(client, users, make_video):
    await make_video(users["alice"], "Open")

    response = await client.get(
        "/videos", headers={"Authorization": f"Bearer {users['alice'].id}"}
    )

    assert response.status_code == 200
    assert response.json()["videos"][0]["isVideoMine"] is False


# ============================================================================
# Sign-in
# ============================================================================


class FakeVerifier:
    """Accepts credentials of the form `ok:<email>`"""

    async def verify(self, credential):
        if not credential.startswith("ok:"):
            return None
        email = credential[3:]
        return VerifiedIdentity(
            email=email,
            username=email.split("@")[0].title(),
            avatar="https://img.example.com/new.png",
        )


@pytest.mark.asyncio
async def test_login_creates_user_and_issues_token(client, db_session):
    app.dependency_overrides[get_identity_verifier] = lambda: FakeVerifier()

    response = await client.post("/auth/login", json={"idToken": "ok:dave@example.com"})

    assert response.status_code == 200
    token = response.json()["token"]
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"token={token}")
    assert "httponly" in cookie.lower()

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["user"]["email"] == "dave@example.com"
    assert me.json()["user"]["username"] == "Dave"
    assert await db_session.scalar(select(func.count()).select_from(User)) == 1


@pytest.mark.asyncio
async def test_login_reuses_existing_account(client, users):
    app.dependency_overrides[get_identity_verifier] = lambda: FakeVerifier()

    response = await client.post(
        "/auth/login", json={"idToken": "ok:alice@example.com"}
    )

    assert decode_token(response.json()["token"]) == users["alice"].id


@pytest.mark.asyncio
async def test_login_rejected_credential(client):
    app.dependency_overrides[get_identity_verifier] = lambda: FakeVerifier()

    response = await client.post("/auth/login", json={"idToken": "forged"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid sign-in credential"}


@pytest.mark.asyncio
async def test_login_refused_without_identity_provider(client):
    response = await client.post(
        "/auth/login", json={"idToken": "ok:alice@example.com"}
    )

    assert response.status_code == 401
