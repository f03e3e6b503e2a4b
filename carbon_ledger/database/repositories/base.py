"""
Base repository with common CRUD operations.

Provides generic database operations that can be inherited by specific repositories.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Provides generic database access methods for any SQLAlchemy model.
    Repositories only flush; the surrounding ``Database`` unit of work commits.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **data: Any) -> ModelType:
        """
        Create a new record.

        Args:
            **data: Field values for the new record

        Returns:
            Created model instance
        """
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Get record by ID.

        Args:
            id: Record UUID

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_all(
        self, skip: int = 0, limit: int = 100, filters: Optional[Dict] = None
    ) -> List[ModelType]:
        """
        Get all records with optional filtering.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Optional dict of field:value filters

        Returns:
            List of model instances
        """
        stmt = self._apply_filters(select(self.model), filters)
        stmt = stmt.offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def apply(self, instance: ModelType, **data: Any) -> ModelType:
        """
        Set fields on a loaded instance and flush them in one statement.

        Args:
            instance: Persistent model instance
            **data: Fields to update

        Returns:
            The refreshed instance
        """
        for field, value in data.items():
            setattr(instance, field, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: UUID, **data: Any) -> Optional[ModelType]:
        """
        Update record by ID.

        Args:
            id: Record UUID
            **data: Fields to update

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await self.get_by_id(id)
        if instance is None:
            return None
        return await self.apply(instance, **data)

    async def delete(self, id: UUID) -> bool:
        """
        Delete record by ID (hard delete).

        Args:
            id: Record UUID

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def count(self, filters: Optional[Dict] = None) -> int:
        """
        Count records with optional filtering.

        Args:
            filters: Optional dict of field:value filters

        Returns:
            Number of matching records
        """
        stmt = self._apply_filters(select(func.count()).select_from(self.model), filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists(self, id: UUID) -> bool:
        """
        Check if record exists by ID.

        Args:
            id: Record UUID

        Returns:
            True if exists, False otherwise
        """
        instance = await self.get_by_id(id)
        return instance is not None

    async def bulk_create(self, items: List[Dict[str, Any]]) -> List[ModelType]:
        """
        Create multiple records in bulk.

        Args:
            items: List of dicts containing field values

        Returns:
            List of created model instances
        """
        instances = [self.model(**item) for item in items]
        self.session.add_all(instances)
        await self.session.flush()

        for instance in instances:
            await self.session.refresh(instance)

        return instances

    def _apply_filters(self, stmt, filters: Optional[Dict]):
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    stmt = stmt.where(getattr(self.model, field) == value)
        return stmt
