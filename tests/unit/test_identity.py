"""
Unit Tests for session tokens and the default identity resolver
"""

import jwt
import pytest
from datetime import datetime, timedelta, timezone

from vidshare.app.config import AuthConfig
from vidshare.infrastructure.identity import (
    JwtTokenResolver,
    RejectingVerifier,
    decode_token,
    issue_token,
)


@pytest.fixture
def settings():
    return AuthConfig(jwt_secret="unit-test-secret", token_expire_minutes=10)


class TestSessionTokens:
    def test_issued_token_decodes_to_user(self, settings):
        token = issue_token("user_alice", settings)

        assert decode_token(token, settings) == "user_alice"

    def test_raw_id_is_rejected(self, settings):
        assert decode_token("user_alice", settings) is None

    def test_expiry_enforced(self, settings):
        issued = datetime.now(timezone.utc) - timedelta(minutes=11)
        token = issue_token("user_alice", settings, now=issued)

        assert decode_token(token, settings) is None

    def test_other_secret_rejected(self, settings):
        token = issue_token(
            "user_alice", AuthConfig(jwt_secret="someone-else", token_expire_minutes=10)
        )

        assert decode_token(token, settings) is None

    def test_token_without_id_claim(self, settings):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token, settings) is None


class TestJwtTokenResolver:
    @pytest.mark.asyncio
    async def test_resolves_signed_token(self, db_session, users, settings):
        resolver = JwtTokenResolver(db_session, settings)

        user = await resolver.resolve(issue_token(users["bob"].id, settings))

        assert user.id == users["bob"].id

    @pytest.mark.asyncio
    async def test_unknown_user_and_blank(self, db_session, users, settings):
        resolver = JwtTokenResolver(db_session, settings)

        assert await resolver.resolve(issue_token("ghost", settings)) is None
        assert await resolver.resolve("   ") is None
        assert await resolver.resolve(users["bob"].id) is None


@pytest.mark.asyncio
async def test_default_verifier_refuses_everything():
    assert await RejectingVerifier().verify("anything") is None
