"""
Pydantic models for document extraction results.
"""
from datetime import date as DateType
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from carbon_ledger.utils.constants import ConfidenceLevel


class ExtractionResult(BaseModel):
    """Fields read from a utility bill or fuel receipt."""

    vendor: str = Field("Unknown", description="Supplier named on the document")
    date: DateType = Field(default_factory=DateType.today, description="Document date")
    consumption: Decimal = Field(Decimal("0"), ge=0, description="Consumed quantity")
    unit: str = Field(..., description="Unit of the consumed quantity")
    total_cost: Decimal = Field(Decimal("0"), ge=0, description="Amount due")
    currency: str = Field("USD", max_length=3)
    notes: Optional[str] = None
    confidence: ConfidenceLevel = ConfidenceLevel.MEDIUM
