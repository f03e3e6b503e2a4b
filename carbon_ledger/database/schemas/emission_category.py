"""
EmissionCategory SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Uuid

from carbon_ledger.database import Base


class EmissionCategoryDBModel(Base):
    """
    Type of consumption (Electricity, Water, Diesel...).

    Reference data: seeded, never mutated by the API.
    """

    __tablename__ = "emission_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False, index=True)

    scope = Column(
        Integer,
        nullable=False,
        comment="GHG Protocol scope (1, 2, or 3), display only",
    )

    icon = Column(String(50), nullable=True)
    description = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = ({"comment": "Emission categories (reference data)"},)

    def __repr__(self):
        return f"<EmissionCategoryDBModel: {self.name} (scope {self.scope})>"
