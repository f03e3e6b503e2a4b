"""
Pydantic models for emission reference data.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EmissionCategoryPydModel(BaseModel):
    """Model for emission category response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    scope: int = Field(..., ge=1, le=3, description="GHG Protocol scope (1, 2, or 3)")
    icon: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime


class EmissionFactorPydModel(BaseModel):
    """Model for emission factor response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID
    unit: str = Field(..., description="Unit of measurement")
    co2e_per_unit: Decimal = Field(..., description="kg CO2e per unit")
    year: int
    valid_until: Optional[date] = None
    is_active: bool
    source: Optional[str] = None
    created_at: datetime


class FactorResolutionPydModel(BaseModel):
    """Outcome of resolving the applicable factor for a category and unit."""

    category_id: UUID
    unit: str
    as_of: date
    factor: Optional[EmissionFactorPydModel] = Field(
        None, description="Applicable factor, null when none applies"
    )
