"""
Emission category matching for document ingestion.

Uploaded documents name their category loosely ("electricity", "natural_gas"),
so lookup tries a substring match first and falls back to fuzzy matching.
"""

import logging
from decimal import Decimal
from typing import Optional, Tuple

from rapidfuzz import fuzz, process
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import EmissionCategoryRepository
from carbon_ledger.database.schemas import EmissionCategoryDBModel

logger = logging.getLogger(__name__)


class CategoryMatcher:
    """
    Service for matching a category name to an emission category.

    Supports substring matching and fuzzy matching with confidence scoring.
    """

    # Default fuzzy matching threshold (80%)
    DEFAULT_THRESHOLD = 80

    def __init__(self, session: AsyncSession):
        """
        Initialize category matcher with database session.

        Args:
            session: Async SQLAlchemy session
        """
        self.session = session
        self.repo = EmissionCategoryRepository(session)

    async def substring_match(self, name: str) -> Optional[EmissionCategoryDBModel]:
        """
        Find the newest category whose name contains ``name``, ignoring case.

        Args:
            name: Category name as submitted

        Returns:
            EmissionCategoryDBModel if found, None otherwise
        """
        category = await self.repo.search_by_name(name)

        if category:
            logger.debug(f"Substring match found for '{name}': {category.name}")
        else:
            logger.debug(f"No substring match for '{name}'")

        return category

    async def fuzzy_match(
        self,
        name: str,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> Optional[Tuple[EmissionCategoryDBModel, Decimal]]:
        """
        Find an emission category using fuzzy matching.

        Underscores are read as spaces, so "natural_gas" scores against
        "Natural Gas".

        Args:
            name: Category name as submitted
            threshold: Minimum similarity score (0-100)

        Returns:
            Tuple of (EmissionCategoryDBModel, confidence_score) if match found, None otherwise
        """
        categories = await self.repo.list_all()

        if not categories:
            logger.warning("No emission categories found")
            return None

        choices = {category.name: category for category in categories}
        query = name.replace("_", " ")

        # token_sort_ratio handles word order
        result = process.extractOne(
            query,
            choices.keys(),
            scorer=fuzz.token_sort_ratio,
            processor=str.lower,
        )

        if result is None:
            logger.warning(f"No fuzzy match found for category '{name}'")
            return None

        matched_name, score, _ = result

        if score < threshold:
            logger.info(
                f"Fuzzy match score {score} below threshold {threshold} "
                f"for category '{name}'"
            )
            return None

        confidence = Decimal(str(score)) / Decimal("100")

        logger.info(
            f"Fuzzy matched category '{name}' to '{matched_name}' "
            f"with {score}% confidence"
        )

        return choices[matched_name], confidence

    async def match(
        self,
        name: str,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> Optional[EmissionCategoryDBModel]:
        """
        Match a category with substring match first, then fuzzy fallback.

        Args:
            name: Category name as submitted
            threshold: Minimum fuzzy match threshold

        Returns:
            EmissionCategoryDBModel, or None when nothing matches
        """
        category = await self.substring_match(name)
        if category:
            return category

        logger.debug(f"No substring match, trying fuzzy match for '{name}'")
        result = await self.fuzzy_match(name, threshold)

        if result is None:
            logger.error(f"No category match (substring or fuzzy) for '{name}'")
            return None

        return result[0]
