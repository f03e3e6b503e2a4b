"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.repositories.data_entry import (
    DataEntryRepository,
    EntryStats,
)
from carbon_ledger.database.repositories.emission_category import (
    EmissionCategoryRepository,
)
from carbon_ledger.database.repositories.emission_factor import EmissionFactorRepository
from carbon_ledger.database.repositories.facility import FacilityRepository
from carbon_ledger.database.repositories.organization import (
    OrganizationRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository",
    "DataEntryRepository",
    "EmissionCategoryRepository",
    "EmissionFactorRepository",
    "EntryStats",
    "FacilityRepository",
    "OrganizationRepository",
    "UserRepository",
]
