"""
Facility SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Numeric, String, Uuid

from carbon_ledger.database import Base


class FacilityDBModel(Base):
    """
    Physical site of an organization.

    Facilities are soft deleted (``is_active = False``) so historical data
    entries keep pointing at them.
    """

    __tablename__ = "facilities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False)
    facility_type = Column(
        String(50),
        nullable=True,
        comment="office, warehouse, factory, retail, data_center or other",
    )

    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)

    latitude = Column(Numeric(9, 6), nullable=True)
    longitude = Column(Numeric(9, 6), nullable=True)

    grid_region = Column(
        String(100),
        nullable=True,
        comment="Electricity grid region, e.g. 'US-WECC (Seattle)'",
    )

    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_facilities_organization_active", "organization_id", "is_active"),
        {"comment": "Organization facilities"},
    )

    def __repr__(self):
        return f"<FacilityDBModel: {self.name} ({self.grid_region})>"
