"""
Pydantic models for organizations and their members.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from carbon_ledger.utils.constants import Currency, DistanceUnit, UserRole, VolumeUnit


class OrganizationCreate(BaseModel):
    """Model for creating an organization."""

    legal_name: str = Field(..., min_length=2, max_length=255)
    fiscal_id: str = Field(
        ..., min_length=5, max_length=100, description="Tax ID / NIT / RFC"
    )
    industry_sector: Optional[str] = Field(None, max_length=100)
    geographic_location: Optional[str] = Field(None, max_length=200)
    default_currency: Currency = Currency.USD
    distance_unit: DistanceUnit = DistanceUnit.KM
    volume_unit: VolumeUnit = VolumeUnit.LITERS
    language: str = Field("es", max_length=10)


class OrganizationUpdate(BaseModel):
    """Model for updating an organization. Only supplied fields change."""

    legal_name: Optional[str] = Field(None, min_length=2, max_length=255)
    industry_sector: Optional[str] = Field(None, max_length=100)
    logo_url: Optional[str] = Field(None, max_length=500)
    default_currency: Optional[Currency] = None
    distance_unit: Optional[DistanceUnit] = None
    volume_unit: Optional[VolumeUnit] = None
    language: Optional[str] = Field(None, max_length=10)


class OrganizationPydModel(BaseModel):
    """Model for organization response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    legal_name: str
    fiscal_id: str
    industry_sector: Optional[str] = None
    geographic_location: Optional[str] = None
    logo_url: Optional[str] = None
    default_currency: str
    distance_unit: str
    volume_unit: str
    language: str
    member_count: int = 0
    facility_count: int = 0
    created_at: datetime
    updated_at: datetime


class OrganizationUserPydModel(BaseModel):
    """Model for a member listed under an organization."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: Optional[str] = None
    role: str
    job_title: Optional[str] = None
    is_active: bool
    created_at: datetime


class InviteUserRequest(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None
    role: UserRole
    job_title: Optional[str] = Field(None, max_length=100)


class InviteUserResult(BaseModel):
    message: str
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    note: Optional[str] = None


class UpdateUserRoleRequest(BaseModel):
    role: UserRole
    job_title: Optional[str] = Field(None, max_length=100)


class InviteCodePydModel(BaseModel):
    invite_code: str
    expires_in: str
    message: str = "Share this code with users to invite them to your organization"
