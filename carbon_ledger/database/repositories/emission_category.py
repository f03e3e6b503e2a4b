"""
Repository for EmissionCategory database operations.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import EmissionCategoryDBModel


class EmissionCategoryRepository(BaseRepository[EmissionCategoryDBModel]):
    """Repository for emission category reference data."""

    def __init__(self, session: AsyncSession):
        super().__init__(EmissionCategoryDBModel, session)

    async def list_all(self) -> List[EmissionCategoryDBModel]:
        stmt = select(self.model).order_by(self.model.scope, self.model.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_by_name(self, name: str) -> Optional[EmissionCategoryDBModel]:
        """
        Find the newest category whose name contains ``name``, ignoring case.

        Args:
            name: Partial category name

        Returns:
            Matching category, or None
        """
        stmt = (
            select(self.model)
            .where(self.model.name.ilike(f"%{name}%"))
            .order_by(self.model.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
