"""
Repositories for Organization and User database operations.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import (
    FacilityDBModel,
    OrganizationDBModel,
    UserDBModel,
)


class OrganizationRepository(BaseRepository[OrganizationDBModel]):
    """Repository for organization operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(OrganizationDBModel, session)

    async def get_by_fiscal_id(self, fiscal_id: str) -> Optional[OrganizationDBModel]:
        stmt = select(self.model).where(self.model.fiscal_id == fiscal_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_active_members(self, organization_id: UUID) -> int:
        stmt = select(func.count()).where(
            UserDBModel.organization_id == organization_id,
            UserDBModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_active_facilities(self, organization_id: UUID) -> int:
        stmt = select(func.count()).where(
            FacilityDBModel.organization_id == organization_id,
            FacilityDBModel.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0


class UserRepository(BaseRepository[UserDBModel]):
    """Repository for user lookups and membership changes."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserDBModel, session)

    async def get_by_email(self, email: str) -> Optional[UserDBModel]:
        stmt = select(self.model).where(func.lower(self.model.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_in_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[UserDBModel]:
        """
        Get a user only if they belong to ``organization_id``.

        Args:
            user_id: User UUID
            organization_id: Organization UUID

        Returns:
            User if found in that organization, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == user_id,
            self.model.organization_id == organization_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_organization(self, organization_id: UUID) -> List[UserDBModel]:
        stmt = (
            select(self.model)
            .where(self.model.organization_id == organization_id)
            .order_by(self.model.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
