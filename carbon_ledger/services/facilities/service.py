"""
Facility service.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import FacilityRepository
from carbon_ledger.database.schemas import FacilityDBModel, UserDBModel
from carbon_ledger.pydantic_models.facility import (
    FacilityCreate,
    FacilityUpdate,
    GeocodeResult,
)
from carbon_ledger.services.access import require_organization, require_role
from carbon_ledger.services.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from carbon_ledger.services.facilities.grid import detect_grid_region, mock_geocode
from carbon_ledger.utils.constants import FACILITY_MANAGER_ROLES

logger = logging.getLogger(__name__)


class FacilityService:
    """
    Facilities of the caller's organization.

    Anyone in the organization can read; only admins and managers can
    create, change or remove.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = FacilityRepository(session)

    async def _get_accessible(self, user: UserDBModel, facility_id: UUID) -> FacilityDBModel:
        facility = await self.repo.get_by_id(facility_id)
        if facility is None:
            raise NotFoundError("Facility not found")
        if facility.organization_id != user.organization_id:
            raise ForbiddenError("You do not have access to this facility")
        return facility

    async def create(self, user: UserDBModel, payload: FacilityCreate) -> FacilityDBModel:
        organization_id = require_organization(user)
        require_role(
            user, FACILITY_MANAGER_ROLES, "Only admins and managers can create facilities"
        )

        data = payload.model_dump()
        if data["facility_type"] is not None:
            data["facility_type"] = data["facility_type"].value
        if (
            data["latitude"] is not None
            and data["longitude"] is not None
            and not data["grid_region"]
        ):
            data["grid_region"] = detect_grid_region(data["latitude"], data["longitude"])

        facility = await self.repo.create(organization_id=organization_id, **data)
        logger.info(f"Facility {facility.id} created in organization {organization_id}")
        return facility

    async def list(self, user: UserDBModel) -> List[FacilityDBModel]:
        organization_id = require_organization(user)
        return await self.repo.list_by_organization(organization_id)

    async def get(self, user: UserDBModel, facility_id: UUID) -> FacilityDBModel:
        return await self._get_accessible(user, facility_id)

    async def update(
        self, user: UserDBModel, facility_id: UUID, payload: FacilityUpdate
    ) -> FacilityDBModel:
        """
        Change the supplied fields of a facility.

        New coordinates without an explicit grid region re-detect the region.

        Raises:
            InvalidInputError: Nothing to update
        """
        facility = await self._get_accessible(user, facility_id)
        require_role(
            user, FACILITY_MANAGER_ROLES, "Only admins and managers can update facilities"
        )

        data = payload.model_dump(exclude_unset=True)
        if not data:
            raise InvalidInputError("No fields to update")

        if data.get("facility_type") is not None:
            data["facility_type"] = data["facility_type"].value
        if (
            "grid_region" not in data
            and data.get("latitude") is not None
            and data.get("longitude") is not None
        ):
            data["grid_region"] = detect_grid_region(data["latitude"], data["longitude"])

        facility = await self.repo.apply(facility, **data)
        logger.info(f"Facility {facility.id} updated: {sorted(data)}")
        return facility

    async def remove(self, user: UserDBModel, facility_id: UUID) -> None:
        """Deactivate a facility. Its data entries are kept."""
        facility = await self._get_accessible(user, facility_id)
        require_role(
            user, FACILITY_MANAGER_ROLES, "Only admins and managers can delete facilities"
        )
        await self.repo.apply(facility, is_active=False)
        logger.info(f"Facility {facility.id} deactivated")

    @staticmethod
    def geocode(address: str) -> GeocodeResult:
        result = mock_geocode(address)
        if result is None:
            raise NotFoundError(
                "Could not geocode address. Please provide coordinates manually."
            )
        return result
