"""
Shared test fixtures
In-memory SQLite database and small data factories
"""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from vidshare.app.database import register_sqlite_functions
from vidshare.app.models import Base, User, Video


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def async_engine():
    """Create async engine for testing"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # Required for in-memory SQLite
    )
    register_sqlite_functions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Create async database session for testing"""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def users(db_session):
    """Three users: alice, bob and carol"""
    created = {}
    for name in ("alice", "bob", "carol"):
        user = User(
            id=f"user_{name}",
            email=f"{name}@example.com",
            username=name.capitalize(),
            avatar=f"https://img.example.com/{name}.png",
        )
        db_session.add(user)
        created[name] = user

    await db_session.commit()
    return created


@pytest.fixture
def make_video(db_session):
    """Factory creating a video `age_minutes` old"""
    base_time = datetime(2024, 1, 1, 12, 0, 0)

    async def _make(owner, title, description="", age_minutes=0, video_id=None):
        video = Video(
            id=video_id or f"video_{title.lower().replace(' ', '_')}",
            user_id=owner.id,
            title=title,
            description=description,
            url=f"https://cdn.example.com/{title}.mp4",
            thumbnail=f"https://cdn.example.com/{title}.jpg",
            created_at=base_time - timedelta(minutes=age_minutes),
        )
        db_session.add(video)
        await db_session.commit()
        await db_session.refresh(video, attribute_names=["user"])
        return video

    return _make


@pytest.fixture
def add_rows(db_session):
    """Insert arbitrary engagement rows and commit"""

    async def _add(*rows):
        db_session.add_all(rows)
        await db_session.commit()
        return rows

    return _add

