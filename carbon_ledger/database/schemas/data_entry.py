"""
DataEntry SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Uuid,
)

from carbon_ledger.database import Base
from carbon_ledger.utils.constants import VerificationStatus


class DataEntryDBModel(Base):
    """
    One consumption record submitted by a user.

    ``emission_factor_id`` and ``co2e_kg`` form a pair: both set or both NULL.
    """

    __tablename__ = "data_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )

    facility_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("facilities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("emission_categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    created_by_user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    entry_date = Column(Date, nullable=False, comment="Date the consumption refers to")

    quantity = Column(Numeric(14, 4), nullable=False)
    unit = Column(String(50), nullable=False)

    emission_factor_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("emission_factors.id", ondelete="RESTRICT"),
        nullable=True,
        comment="Factor used for co2e_kg, NULL when none applied",
    )

    co2e_kg = Column(
        Numeric(28, 10),
        nullable=True,
        comment="quantity x co2e_per_unit of emission_factor_id",
    )

    document_filename = Column(String(500), nullable=True)
    document_url = Column(String(1000), nullable=True)

    vendor_name = Column(String(255), nullable=True)
    invoice_number = Column(String(100), nullable=True)
    total_cost = Column(Numeric(14, 2), nullable=True)
    notes = Column(String, nullable=True)

    confidence_level = Column(
        String(10),
        nullable=True,
        comment="OCR confidence (high, medium, low), NULL for manual entries",
    )

    verification_status = Column(
        String(20),
        nullable=False,
        default=VerificationStatus.PENDING.value,
    )

    verified_by_user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "(emission_factor_id IS NULL) = (co2e_kg IS NULL)",
            name="ck_data_entries_emission_pair",
        ),
        CheckConstraint("quantity >= 0", name="ck_data_entries_quantity_non_negative"),
        Index("ix_data_entries_org_entry_date", "organization_id", "entry_date"),
        Index("ix_data_entries_org_status", "organization_id", "verification_status"),
        {"comment": "Consumption data entries with derived CO2e"},
    )

    def __repr__(self):
        return (
            f"<DataEntryDBModel: {self.quantity} {self.unit} on {self.entry_date} "
            f"-> {self.co2e_kg} kgCO2e>"
        )
