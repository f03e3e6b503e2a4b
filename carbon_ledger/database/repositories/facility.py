"""
Repository for Facility database operations.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import FacilityDBModel


class FacilityRepository(BaseRepository[FacilityDBModel]):
    """Repository for facility operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(FacilityDBModel, session)

    async def get_in_organization(
        self, facility_id: UUID, organization_id: UUID
    ) -> Optional[FacilityDBModel]:
        """
        Get a facility only if it belongs to ``organization_id``.

        Args:
            facility_id: Facility UUID
            organization_id: Organization UUID

        Returns:
            Facility if it exists in that organization, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == facility_id,
            self.model.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_organization(self, organization_id: UUID) -> List[FacilityDBModel]:
        """
        Get every facility of an organization, newest first.

        Soft-deleted facilities are included so callers can show history.
        """
        stmt = (
            select(self.model)
            .where(self.model.organization_id == organization_id)
            .order_by(self.model.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
