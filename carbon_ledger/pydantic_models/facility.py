"""
Pydantic models for facilities.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from carbon_ledger.utils.constants import FacilityType


class FacilityBase(BaseModel):
    """Base facility model."""

    name: str = Field(..., min_length=2, max_length=255)
    facility_type: Optional[FacilityType] = None
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    grid_region: Optional[str] = Field(
        None, max_length=100, description="e.g. 'US-WECC (Seattle)'"
    )


class FacilityCreate(FacilityBase):
    """Model for creating a facility."""
    pass


class FacilityUpdate(BaseModel):
    """Model for updating a facility. Only supplied fields change."""

    name: Optional[str] = Field(None, min_length=2, max_length=255)
    facility_type: Optional[FacilityType] = None
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    grid_region: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None


class FacilityPydModel(FacilityBase):
    """Model for facility response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    facility_type: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1)


class GeocodeResult(BaseModel):
    address: str
    latitude: Decimal
    longitude: Decimal
    grid_region: str
    message: str = "Address geocoded successfully"
