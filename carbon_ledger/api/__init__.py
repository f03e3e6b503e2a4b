"""
API routers module.
"""
from carbon_ledger.api.data_entries import router as data_entries_router
from carbon_ledger.api.facilities import router as facilities_router
from carbon_ledger.api.factors import router as factors_router
from carbon_ledger.api.organizations import router as organizations_router

__all__ = [
    "data_entries_router",
    "facilities_router",
    "factors_router",
    "organizations_router",
]
