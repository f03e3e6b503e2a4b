"""
Coarse electricity grid regions and a small offline geocoder.

Regions are rough US interconnection boxes, good enough to pre-fill a
facility's grid region.
"""
from decimal import Decimal
from typing import Optional, Union

from carbon_ledger.pydantic_models.facility import GeocodeResult

UNKNOWN_REGION = "Unknown Region"

Coordinate = Union[Decimal, float]

KNOWN_CITIES = {
    "seattle": ("47.6062", "-122.3321", "US-WECC (Seattle)"),
    "san francisco": ("37.7749", "-122.4194", "US-WECC (San Francisco)"),
    "los angeles": ("34.0522", "-118.2437", "US-WECC (Los Angeles)"),
    "new york": ("40.7128", "-74.0060", "US-EAST (New York)"),
    "chicago": ("41.8781", "-87.6298", "US-EAST (Chicago)"),
    "houston": ("29.7604", "-95.3698", "US-ERCOT (Texas)"),
    "austin": ("30.2672", "-97.7431", "US-ERCOT (Texas)"),
    "miami": ("25.7617", "-80.1918", "US-EAST (Florida)"),
}


def detect_grid_region(latitude: Coordinate, longitude: Coordinate) -> str:
    """
    Guess the grid region of a coordinate.

    Args:
        latitude: Degrees north
        longitude: Degrees east

    Returns:
        Region label such as "US-WECC (Seattle)", or "Unknown Region"
    """
    latitude = float(latitude)
    longitude = float(longitude)

    # Western Interconnection
    if longitude < -100 and latitude > 32:
        if latitude > 47:
            return "US-WECC (Seattle)"
        if latitude > 37:
            return "US-WECC (San Francisco)"
        return "US-WECC (Los Angeles)"

    # Eastern Interconnection
    if longitude > -100 and latitude > 32:
        if latitude > 40:
            return "US-EAST (New York)"
        return "US-EAST (Florida)"

    # ERCOT
    if 26 < latitude < 37 and -107 < longitude < -93:
        return "US-ERCOT (Texas)"

    return UNKNOWN_REGION


def mock_geocode(address: str) -> Optional[GeocodeResult]:
    """Resolve an address naming one of ``KNOWN_CITIES``, else None."""
    address_lower = address.lower()
    for city, (latitude, longitude, grid_region) in KNOWN_CITIES.items():
        if city in address_lower:
            return GeocodeResult(
                address=address,
                latitude=Decimal(latitude),
                longitude=Decimal(longitude),
                grid_region=grid_region,
            )
    return None
