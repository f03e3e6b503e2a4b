"""
Shared helpers for tests.
"""
from decimal import Decimal
from typing import Optional

from carbon_ledger.core.config import ConfigFile, get_config
from carbon_ledger.core.security import create_access_token
from carbon_ledger.database.schemas import UserDBModel
from carbon_ledger.test.factory.emission_factor import (
    EmissionCategoryFactory,
    EmissionFactorFactory,
)
from carbon_ledger.test.factory.organization import OrganizationFactory, UserFactory
from carbon_ledger.utils.constants import UserRole


def auth_headers(user: UserDBModel) -> dict[str, str]:
    token = create_access_token(get_config(ConfigFile.TEST), user.id)
    return {"Authorization": f"Bearer {token}"}


async def create_member(organization_id=None, role: UserRole = UserRole.USER, **kwargs):
    """Create an organization (unless given) and a user in it."""
    if organization_id is None:
        organization = await OrganizationFactory()
        organization_id = organization.id
    return await UserFactory(organization_id=organization_id, role=role.value, **kwargs)


async def create_electricity(co2e_per_unit: Optional[Decimal] = Decimal("0.5")):
    """Electricity category with one active kWh factor (or none)."""
    category = await EmissionCategoryFactory(name="Electricity")
    factor = None
    if co2e_per_unit is not None:
        factor = await EmissionFactorFactory(
            category_id=category.id, unit="kWh", co2e_per_unit=co2e_per_unit
        )
    return category, factor
