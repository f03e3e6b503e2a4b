"""
Tenancy and role guards shared by the services.
"""
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import FacilityRepository
from carbon_ledger.database.schemas import FacilityDBModel, UserDBModel
from carbon_ledger.services.exceptions import ForbiddenError
from carbon_ledger.utils.constants import UserRole


def require_organization(user: UserDBModel) -> UUID:
    """Return the caller's organization id, or refuse if they have none."""
    if user.organization_id is None:
        raise ForbiddenError("User must belong to an organization")
    return user.organization_id


def require_role(user: UserDBModel, roles: Iterable[str], message: str) -> None:
    if user.role not in roles:
        raise ForbiddenError(message)


def require_admin_of(user: UserDBModel, organization_id: UUID) -> None:
    """
    Require ``user`` to be an administrator of ``organization_id``.

    Raises:
        ForbiddenError: Different organization or not an admin
    """
    if user.organization_id != organization_id:
        raise ForbiddenError("User does not belong to this organization")
    require_role(
        user, {UserRole.ADMIN.value}, "Only administrators can perform this action"
    )


async def require_facility(
    session: AsyncSession, facility_id: UUID, organization_id: UUID
) -> FacilityDBModel:
    """
    Require the facility to belong to ``organization_id``.

    A facility from another organization is indistinguishable from a
    missing one.
    """
    facility = await FacilityRepository(session).get_in_organization(
        facility_id, organization_id
    )
    if facility is None:
        raise ForbiddenError("Facility not found or access denied")
    return facility
