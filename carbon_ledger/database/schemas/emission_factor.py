"""
EmissionFactor SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
)

from carbon_ledger.database import Base


class EmissionFactorDBModel(Base):
    """
    Coefficient converting a quantity of one category/unit into kg CO2e.

    Several factors can exist for the same (category, unit) pair across years;
    the resolver picks the newest active one still valid on the requested date.
    """

    __tablename__ = "emission_factors"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("emission_categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    unit = Column(
        String(50),
        nullable=False,
        comment="Unit of measurement (e.g., kWh, m³, liters)",
    )

    co2e_per_unit = Column(
        Numeric(12, 6),
        nullable=False,
        comment="kg CO2e emitted per unit",
    )

    year = Column(Integer, nullable=False, comment="Reference year of the factor")

    valid_until = Column(
        Date,
        nullable=True,
        comment="Last date the factor applies, NULL for open-ended",
    )

    is_active = Column(Boolean, nullable=False, default=True)

    source = Column(
        String(200),
        nullable=True,
        comment="Source of the emission factor (e.g., 'DEFRA 2024', 'EPA 2023')",
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_emission_factors_category_unit", "category_id", "unit"),
        Index("ix_emission_factors_category_year", "category_id", "year"),
        {"comment": "Emission factor lookup table for CO2e calculations"},
    )

    def __repr__(self):
        return (
            f"<EmissionFactorDBModel: {self.co2e_per_unit} kgCO2e/{self.unit} "
            f"({self.year})>"
        )
