"""
Organization and User SQLAlchemy models.

Organizations are the tenancy boundary: every facility and data entry belongs
to exactly one, and users see only their own organization's records.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Uuid

from carbon_ledger.database import Base
from carbon_ledger.utils.constants import UserRole


class OrganizationDBModel(Base):
    """Tenant owning facilities, users and data entries."""

    __tablename__ = "organizations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    legal_name = Column(String(255), nullable=False, comment="Registered legal name")

    fiscal_id = Column(
        String(100),
        nullable=False,
        unique=True,
        comment="Tax identifier (Tax ID / NIT / RFC)",
    )

    industry_sector = Column(String(100), nullable=True)
    geographic_location = Column(String(200), nullable=True)
    logo_url = Column(String(500), nullable=True)

    default_currency = Column(String(3), nullable=False, default="USD")
    distance_unit = Column(String(10), nullable=False, default="km")
    volume_unit = Column(String(10), nullable=False, default="liters")
    language = Column(String(10), nullable=False, default="es")

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = ({"comment": "Tenant organizations"},)

    def __repr__(self):
        return f"<OrganizationDBModel: {self.legal_name} ({self.fiscal_id})>"


class UserDBModel(Base):
    """
    Application user.

    Accounts are provisioned by the authentication layer; this service only
    reads them to resolve organization membership and role.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    email = Column(String(255), nullable=False, unique=True)
    full_name = Column(String(255), nullable=True)

    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Organization the user belongs to, NULL while unaffiliated",
    )

    role = Column(
        String(20),
        nullable=False,
        default=UserRole.USER.value,
        comment="admin, manager, user or viewer",
    )

    job_title = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_users_organization_role", "organization_id", "role"),
        {"comment": "Users and their organization membership"},
    )

    def __repr__(self):
        return f"<UserDBModel: {self.email} ({self.role})>"
