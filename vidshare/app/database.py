"""
Database Configuration and Session Management
Uses SQLAlchemy with async support
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from vidshare.app.config import DatabaseConfig, get_config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for models"""


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def register_sqlite_functions(engine: AsyncEngine) -> None:
    """
    Install Python functions on every new SQLite connection

    SQLite's built-in lower() only folds ASCII; `casefold(x)` gives
    repositories full Unicode case-insensitive matching.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("casefold", 1, _casefold)


class DatabaseManager:
    """
    Owns the async engine and session factory

    The engine is created lazily so importing the application never opens a
    connection.
    """

    def __init__(self, settings: Optional[DatabaseConfig] = None):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def settings(self) -> DatabaseConfig:
        if self._settings is None:
            self._settings = get_config().database
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine(self.settings)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    @staticmethod
    def _create_engine(settings: DatabaseConfig) -> AsyncEngine:
        if settings.is_sqlite:
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in settings.url:
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_size": settings.pool_size,
                "max_overflow": settings.max_overflow,
                "pool_pre_ping": True,
            }
        engine = create_async_engine(settings.url, echo=settings.echo, **kwargs)
        if settings.is_sqlite:
            register_sqlite_functions(engine)
        return engine

    async def create_tables(self) -> None:
        """Create all tables defined by models"""
        # Registers every mapped class on Base.metadata
        import vidshare.app.models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("✅ Database tables created successfully")
        except Exception as e:
            logger.error(f"❌ Failed to create database tables: {e}")
            raise

    async def drop_tables(self) -> None:
        """
        Drop all tables (use with caution!)
        Only use in development/testing
        """
        import vidshare.app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("⚠️  All tables dropped")

    async def ping(self) -> bool:
        """Run a trivial query against the database"""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar_one() == 1

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Session scope; rolls back when the block raises

        Usage:
            async with db_manager.session() as session:
                repo = VideoRepository(session)
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose the engine and its connection pool"""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("🔌 Database connections closed")


db_manager = DatabaseManager()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session

    Usage in FastAPI:
        @router.get("/videos")
        async def get_videos(db: AsyncSession = Depends(get_session)):
            ...

    Yields:
        Database session
    """
    async with db_manager.session() as session:
        yield session
