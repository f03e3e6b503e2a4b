"""
SQLAlchemy database models (schemas).
"""
from carbon_ledger.database.schemas.data_entry import DataEntryDBModel
from carbon_ledger.database.schemas.emission_category import EmissionCategoryDBModel
from carbon_ledger.database.schemas.emission_factor import EmissionFactorDBModel
from carbon_ledger.database.schemas.facility import FacilityDBModel
from carbon_ledger.database.schemas.organization import (
    OrganizationDBModel,
    UserDBModel,
)

__all__ = [
    "DataEntryDBModel",
    "EmissionCategoryDBModel",
    "EmissionFactorDBModel",
    "FacilityDBModel",
    "OrganizationDBModel",
    "UserDBModel",
]
