"""
CO2e calculation.

``compute`` is the pure multiplication; ``EmissionAssessment`` carries the
factor id and the resulting kg CO2e as one value so they are always written
or cleared together.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.schemas import EmissionFactorDBModel
from carbon_ledger.services.calculators.factor_resolver import FactorResolver

logger = logging.getLogger(__name__)


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute(
    quantity: Decimal, factor: Optional[EmissionFactorDBModel]
) -> Optional[Decimal]:
    """
    Multiply a quantity by a factor's kg CO2e per unit.

    No rounding is applied.

    Args:
        quantity: Consumed quantity
        factor: Applicable emission factor, or None

    Returns:
        kg CO2e, or None when there is no factor
    """
    if factor is None:
        return None
    return _as_decimal(quantity) * _as_decimal(factor.co2e_per_unit)


@dataclass(frozen=True)
class EmissionAssessment:
    """A computed CO2e value together with the factor it came from."""

    emission_factor_id: UUID
    co2e_kg: Decimal

    @staticmethod
    def columns(assessment: Optional["EmissionAssessment"]) -> dict[str, Any]:
        """
        Column values for a data entry row.

        Args:
            assessment: The assessment, or None to clear both columns

        Returns:
            Mapping with ``emission_factor_id`` and ``co2e_kg``
        """
        if assessment is None:
            return {"emission_factor_id": None, "co2e_kg": None}
        return {
            "emission_factor_id": assessment.emission_factor_id,
            "co2e_kg": assessment.co2e_kg,
        }


def assess(
    quantity: Decimal, factor: Optional[EmissionFactorDBModel]
) -> Optional[EmissionAssessment]:
    """Pair ``compute`` with the id of the factor used."""
    co2e_kg = compute(quantity, factor)
    if co2e_kg is None:
        return None
    return EmissionAssessment(emission_factor_id=factor.id, co2e_kg=co2e_kg)


class CO2eCalculator:
    """
    Resolve the factor for an entry's category and unit, then compute CO2e.

    Used identically by manual creation, document ingestion and updates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.resolver = FactorResolver(session)

    async def assess(
        self,
        category_id: UUID,
        unit: str,
        quantity: Decimal,
        as_of: Optional[date] = None,
    ) -> Optional[EmissionAssessment]:
        factor = await self.resolver.resolve(category_id, unit, as_of)
        assessment = assess(quantity, factor)

        if assessment is not None:
            logger.info(
                f"Calculated {assessment.co2e_kg} kgCO2e for {quantity} {unit} "
                f"using factor {assessment.emission_factor_id}"
            )
        return assessment
