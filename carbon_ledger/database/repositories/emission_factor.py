"""
Repository for EmissionFactor database operations.

Handles all database interactions for emission factors.
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import EmissionFactorDBModel


class EmissionFactorRepository(BaseRepository[EmissionFactorDBModel]):
    """Repository for emission factor operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize emission factor repository.

        Args:
            session: Async database session
        """
        super().__init__(EmissionFactorDBModel, session)

    async def get_by_category(
        self, category_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[EmissionFactorDBModel]:
        """
        Get emission factors of one category, newest year first.

        Args:
            category_id: Emission category UUID
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of emission factors for the category
        """
        stmt = (
            select(self.model)
            .where(self.model.category_id == category_id)
            .order_by(self.model.year.desc(), self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_applicable(
        self, category_id: UUID, unit: str, as_of: date
    ) -> Optional[EmissionFactorDBModel]:
        """
        Get the single factor that applies to (category, unit) on ``as_of``.

        Candidates are active, match the unit case-insensitively and are
        either open-ended or valid until at least ``as_of``. The greatest
        year wins, then the most recently created row.

        Args:
            category_id: Emission category UUID
            unit: Unit of the quantity
            as_of: Date the factor must still be valid on

        Returns:
            The applicable factor, or None when nothing matches
        """
        stmt = (
            select(self.model)
            .where(
                self.model.category_id == category_id,
                func.lower(self.model.unit) == func.lower(unit),
                self.model.is_active.is_(True),
                or_(
                    self.model.valid_until.is_(None),
                    self.model.valid_until >= as_of,
                ),
            )
            .order_by(self.model.year.desc(), self.model.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
