from carbon_ledger.services.facilities.grid import detect_grid_region, mock_geocode
from carbon_ledger.services.facilities.service import FacilityService

__all__ = ["FacilityService", "detect_grid_region", "mock_geocode"]
