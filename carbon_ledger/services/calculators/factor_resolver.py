"""
Emission factor resolution.

Picks the one factor that applies to a (category, unit) pair on a date.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import EmissionFactorRepository
from carbon_ledger.database.schemas import EmissionFactorDBModel

logger = logging.getLogger(__name__)


class FactorResolver:
    """
    Service resolving the current emission factor.

    A missing factor is a normal outcome for new or uncommon units: the
    resolver returns None and callers store the entry without CO2e.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize resolver with database session.

        Args:
            session: Async SQLAlchemy session
        """
        self.session = session
        self.repo = EmissionFactorRepository(session)

    async def resolve(
        self,
        category_id: UUID,
        unit: str,
        as_of: Optional[date] = None,
    ) -> Optional[EmissionFactorDBModel]:
        """
        Find the applicable emission factor.

        Args:
            category_id: Emission category UUID
            unit: Unit of the quantity, compared case-insensitively
            as_of: Date the factor must be valid on, defaults to today

        Returns:
            EmissionFactorDBModel if one applies, None otherwise

        Example:
            >>> factor = await resolver.resolve(electricity.id, "kwh")
            >>> factor.co2e_per_unit
            Decimal('0.500000')
        """
        as_of = as_of or date.today()
        factor = await self.repo.find_applicable(category_id, unit, as_of)

        if factor is None:
            logger.warning(
                f"No active emission factor for category {category_id}, "
                f"unit '{unit}' as of {as_of}"
            )
        else:
            logger.debug(
                f"Resolved factor {factor.id} ({factor.co2e_per_unit} kgCO2e/{factor.unit}, "
                f"{factor.year}) for category {category_id}"
            )

        return factor
