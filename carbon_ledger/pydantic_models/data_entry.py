"""
Pydantic models for data entries.
"""
from datetime import date as DateType
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from carbon_ledger.pydantic_models.extraction import ExtractionResult
from carbon_ledger.utils.constants import VerificationStatus


class DataEntryCreate(BaseModel):
    """Model for creating a data entry manually."""

    facility_id: Optional[UUID] = None
    category_id: UUID
    entry_date: DateType
    quantity: Decimal = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    vendor_name: Optional[str] = Field(None, max_length=255)
    invoice_number: Optional[str] = Field(None, max_length=100)
    total_cost: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    document_url: Optional[str] = Field(None, max_length=1000)
    document_filename: Optional[str] = Field(None, max_length=500)


class DataEntryUpdate(BaseModel):
    """
    Model for updating a data entry.

    Only fields present in the request body are applied; sending ``null``
    for an optional field clears it.
    """

    facility_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    entry_date: Optional[DateType] = None
    quantity: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    vendor_name: Optional[str] = Field(None, max_length=255)
    invoice_number: Optional[str] = Field(None, max_length=100)
    total_cost: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    verification_status: Optional[VerificationStatus] = None


class DataEntryReject(BaseModel):
    """Reviewer feedback when sending an entry back."""

    notes: Optional[str] = None


class DataEntryPydModel(BaseModel):
    """Model for data entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organization_id: UUID
    facility_id: Optional[UUID] = None
    category_id: UUID
    created_by_user_id: Optional[UUID] = None
    entry_date: DateType
    quantity: Decimal
    unit: str
    emission_factor_id: Optional[UUID] = None
    co2e_kg: Optional[Decimal] = None
    document_filename: Optional[str] = None
    document_url: Optional[str] = None
    vendor_name: Optional[str] = None
    invoice_number: Optional[str] = None
    total_cost: Optional[Decimal] = None
    notes: Optional[str] = None
    confidence_level: Optional[str] = None
    verification_status: str
    verified_by_user_id: Optional[UUID] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ProcessDocumentResponse(BaseModel):
    """Entry created from an uploaded document together with what was read."""

    data_entry: DataEntryPydModel
    ocr_result: ExtractionResult
    message: str = "Document processed successfully"


class DataEntryStatsPydModel(BaseModel):
    """Yearly entry statistics for an organization."""

    model_config = ConfigDict(from_attributes=True)

    year: int
    total_entries: int
    total_emissions_kg: Decimal
    facilities_with_data: int
    verified_entries: int
    action_required_entries: int
