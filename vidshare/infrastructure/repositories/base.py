"""
Base Repository Pattern
Provides generic CRUD operations for all entities
"""

from typing import Generic, TypeVar, Type, List, Optional, Any, Iterable, cast
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.orm import InstrumentedAttribute
import logging

from vidshare.app.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repository with generic CRUD operations

    Usage:
        class VideoRepository(BaseRepository[Video]):
            def __init__(self, session: AsyncSession):
                super().__init__(session, Video)
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """
        Initialize repository

        Args:
            session: Database session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model = model

    def _id_col(self) -> InstrumentedAttribute:
        return cast(InstrumentedAttribute, getattr(self.model, "id"))

    # ========================================================================
    # CREATE Operations
    # ========================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create new entity

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        try:
            instance: ModelType = cast(Any, self.model)(**kwargs)
            self.session.add(instance)
            await self.session.commit()
            await self.session.refresh(instance)
            logger.info(f"✅ Created {self.model.__name__}: {instance.id}")
            return instance
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to create {self.model.__name__}: {e}")
            raise

    # ========================================================================
    # READ Operations
    # ========================================================================

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        Get entity by ID

        Args:
            id: Entity ID

        Returns:
            Model instance or None
        """
        try:
            result = await self.session.get(self.model, id)
            return cast(Optional[ModelType], result)
        except Exception as e:
            logger.error(f"❌ Failed to get {self.model.__name__} by ID: {e}")
            raise

    async def get_many(self, ids: Iterable[str]) -> List[ModelType]:
        """Get all entities whose ID is in `ids` (unknown IDs are skipped)"""
        ids = list(ids)
        if not ids:
            return []
        try:
            result = await self.session.execute(
                select(self.model).where(self._id_col().in_(ids))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"❌ Failed to get many {self.model.__name__}: {e}")
            raise

    async def count(self, **filters) -> int:
        """
        Count entities matching filters

        Args:
            **filters: Filter conditions

        Returns:
            Count of matching records
        """
        try:
            query = select(func.count()).select_from(self.model)
            for key, value in filters.items():
                if hasattr(self.model, key):
                    query = query.where(getattr(self.model, key) == value)

            result = await self.session.execute(query)
            total = result.scalar_one_or_none()
            return int(total or 0)
        except Exception as e:
            logger.error(f"❌ Failed to count {self.model.__name__}: {e}")
            raise

    async def exists(self, id: str) -> bool:
        """
        Check if entity exists

        Args:
            id: Entity ID

        Returns:
            True if exists, False otherwise
        """
        try:
            stmt = (
                select(func.count())
                .select_from(self.model)
                .where(self._id_col() == id)
            )
            result = await self.session.execute(stmt)
            count_val = result.scalar_one_or_none()
            return int(count_val or 0) > 0
        except Exception as e:
            logger.error(f"❌ Failed to check existence: {e}")
            raise

    # ========================================================================
    # DELETE Operations
    # ========================================================================

    async def delete(self, id: str) -> bool:
        """
        Delete entity by ID

        Args:
            id: Entity ID

        Returns:
            True if deleted, False if not found
        """
        try:
            result = await self.session.execute(
                delete(self.model).where(self._id_col() == id)
            )
            await self.session.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"✅ Deleted {self.model.__name__}: {id}")
            else:
                logger.warning(f"⚠️ {self.model.__name__} not found for deletion: {id}")

            return deleted
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to delete {self.model.__name__}: {e}")
            raise

    # ========================================================================
    # Aggregation Helpers
    # ========================================================================

    async def _count_grouped(
        self, key_column: Any, keys: List[str], *conditions: Any
    ) -> dict:
        """
        Count rows per value of `key_column` restricted to `keys`

        Keys with no rows are reported as 0.
        """
        counts = {key: 0 for key in keys}
        if not keys:
            return counts

        query = (
            select(key_column, func.count())
            .where(key_column.in_(keys), *conditions)
            .group_by(key_column)
        )
        try:
            result = await self.session.execute(query)
        except Exception as e:
            logger.error(f"❌ Failed to count {self.model.__name__} by group: {e}")
            raise

        for key, total in result.all():
            counts[key] = int(total)
        return counts

