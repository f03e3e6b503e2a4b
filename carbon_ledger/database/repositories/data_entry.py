"""
Repository for DataEntry database operations.

Every query here is scoped by organization; callers never see another
tenant's rows.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import DataEntryDBModel
from carbon_ledger.utils.constants import VerificationStatus


@dataclass(frozen=True)
class EntryStats:
    """Yearly aggregate of an organization's data entries."""

    total_entries: int
    total_emissions_kg: Decimal
    facilities_with_data: int
    verified_entries: int
    action_required_entries: int


class DataEntryRepository(BaseRepository[DataEntryDBModel]):
    """Repository for data entry operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(DataEntryDBModel, session)

    async def get_in_organization(
        self, entry_id: UUID, organization_id: UUID
    ) -> Optional[DataEntryDBModel]:
        stmt = select(self.model).where(
            self.model.id == entry_id,
            self.model.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_organization(
        self,
        organization_id: UUID,
        facility_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
    ) -> List[DataEntryDBModel]:
        """
        Get an organization's entries, newest entry date first.

        Args:
            organization_id: Organization UUID
            facility_id: Only entries of this facility
            category_id: Only entries of this category
            start_date: Entry date lower bound (inclusive)
            end_date: Entry date upper bound (inclusive)
            status: Only entries with this verification status

        Returns:
            List of matching entries
        """
        stmt = select(self.model).where(self.model.organization_id == organization_id)

        if facility_id:
            stmt = stmt.where(self.model.facility_id == facility_id)
        if category_id:
            stmt = stmt.where(self.model.category_id == category_id)
        if start_date:
            stmt = stmt.where(self.model.entry_date >= start_date)
        if end_date:
            stmt = stmt.where(self.model.entry_date <= end_date)
        if status:
            stmt = stmt.where(self.model.verification_status == status)

        stmt = stmt.order_by(self.model.entry_date.desc(), self.model.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_in_organization(self, entry_id: UUID, organization_id: UUID) -> bool:
        stmt = delete(self.model).where(
            self.model.id == entry_id,
            self.model.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def get_stats(self, organization_id: UUID, year: int) -> EntryStats:
        """
        Aggregate one calendar year of an organization's entries.

        Args:
            organization_id: Organization UUID
            year: Calendar year of ``entry_date``

        Returns:
            EntryStats for the year
        """

        def count_status(status: VerificationStatus):
            return func.coalesce(
                func.sum(
                    case((self.model.verification_status == status.value, 1), else_=0)
                ),
                0,
            )

        stmt = select(
            func.count(self.model.id),
            func.sum(self.model.co2e_kg),
            func.count(func.distinct(self.model.facility_id)),
            count_status(VerificationStatus.VERIFIED),
            count_status(VerificationStatus.ACTION_REQUIRED),
        ).where(
            self.model.organization_id == organization_id,
            self.model.entry_date >= date(year, 1, 1),
            self.model.entry_date <= date(year, 12, 31),
        )
        result = await self.session.execute(stmt)
        total, emissions, facilities, verified, action_required = result.one()

        return EntryStats(
            total_entries=total or 0,
            total_emissions_kg=Decimal(str(emissions)) if emissions is not None else Decimal("0"),
            facilities_with_data=facilities or 0,
            verified_entries=int(verified or 0),
            action_required_entries=int(action_required or 0),
        )
