"""
Database seeding service for loading emission reference data from CSV files.

Usage:
    from carbon_ledger.services.seed_database import DatabaseSeeder

    async with DatabaseSeeder() as seeder:
        await seeder.seed_all(clear_existing=True)
"""

import csv
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import (
    EmissionCategoryRepository,
    EmissionFactorRepository,
    OrganizationRepository,
    UserRepository,
)
from carbon_ledger.database.schemas import (
    EmissionCategoryDBModel,
    EmissionFactorDBModel,
    UserDBModel,
)
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.utils.constants import UserRole

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "seed_data"


class DatabaseSeeder:
    """Service for seeding emission categories and factors from CSV files."""

    def __init__(
        self,
        session: AsyncSession | None = None,
        data_dir: str | Path = DEFAULT_DATA_DIR,
    ):
        """
        Initialize the database seeder.

        Args:
            session: Optional async database session. If not provided, will create one.
            data_dir: Directory containing CSV files (default: carbon_ledger/seed_data)
        """
        self._session = session
        self._external_session = session is not None
        self.data_dir = Path(data_dir)

        if not self.data_dir.exists():
            raise ValueError(f"Data directory not found: {self.data_dir}")

    async def __aenter__(self):
        """Context manager entry."""
        if not self._external_session:
            db = Database()
            self._session = await db.__aenter__()
            self._db_context = db
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if not self._external_session and hasattr(self, "_db_context"):
            await self._db_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        if not self._session:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    async def seed_all(self, clear_existing: bool = False) -> dict[str, Any]:
        """
        Seed all reference data from CSV files.

        Categories already present (by name) are reused, and factors already
        present for the same category, unit and year are skipped, so seeding
        twice does not duplicate rows.

        Args:
            clear_existing: If True, clear existing reference data before seeding

        Returns:
            Dictionary with seeding statistics
        """
        logger.info("Starting database seeding")

        stats = {
            "emission_categories": 0,
            "emission_factors": 0,
            "errors": [],
        }

        if clear_existing:
            await self._clear_existing_data()

        categories = await self.seed_emission_categories(stats["errors"])
        stats["emission_categories"] = categories["created"]
        stats["emission_factors"] = await self.seed_emission_factors(
            categories["by_name"], stats["errors"]
        )

        await self.session.flush()
        logger.info(f"Database seeding completed: {stats}")
        return stats

    async def _clear_existing_data(self):
        """
        Clear emission reference data.

        Factors referenced by data entries cannot be removed; clear entries
        first in that case.
        """
        logger.info("Clearing existing reference data")
        await self.session.execute(delete(EmissionFactorDBModel))
        await self.session.execute(delete(EmissionCategoryDBModel))
        await self.session.flush()
        logger.info("Existing reference data cleared")

    async def seed_emission_categories(self, errors: list) -> dict[str, Any]:
        """
        Load emission categories from emission_categories.csv.

        Returns:
            Dict with the number created and every category keyed by name
        """
        repo = EmissionCategoryRepository(self.session)
        by_name = {category.name: category for category in await repo.list_all()}
        created = 0

        csv_file = self.data_dir / "emission_categories.csv"
        if not csv_file.exists():
            logger.warning(f"File not found: {csv_file}")
            return {"created": 0, "by_name": by_name}

        logger.info(f"Loading emission categories from {csv_file}")
        with open(csv_file, "r", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                name = row["Name"].strip()
                if name in by_name:
                    continue
                try:
                    by_name[name] = await repo.create(
                        name=name,
                        scope=int(row["Scope"]),
                        icon=row.get("Icon") or None,
                        description=row.get("Description") or None,
                    )
                    created += 1
                except ValueError as e:
                    logger.warning(f"Failed to create emission category from row {row}: {e}")
                    errors.append(f"category {name}: {e}")

        logger.info(f"Created {created} emission categories")
        return {"created": created, "by_name": by_name}

    async def seed_emission_factors(
        self, categories: dict[str, EmissionCategoryDBModel], errors: list
    ) -> int:
        """
        Load emission factors from emission_factors.csv.

        Returns:
            Number of emission factors created
        """
        csv_file = self.data_dir / "emission_factors.csv"
        if not csv_file.exists():
            logger.warning(f"File not found: {csv_file}")
            return 0

        logger.info(f"Loading emission factors from {csv_file}")
        repo = EmissionFactorRepository(self.session)
        count = 0

        with open(csv_file, "r", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                category = categories.get(row["Category"].strip())
                if category is None:
                    logger.warning(f"Unknown category in factor row {row}")
                    errors.append(f"factor row {row}: unknown category")
                    continue

                try:
                    year = int(row["Year"])
                    existing = await repo.get_by_category(category.id, limit=1000)
                    if any(f.unit == row["Unit"] and f.year == year for f in existing):
                        continue

                    valid_until = row.get("Valid until") or None
                    await repo.create(
                        category_id=category.id,
                        unit=row["Unit"],
                        co2e_per_unit=Decimal(row["CO2e"]),
                        year=year,
                        valid_until=date.fromisoformat(valid_until) if valid_until else None,
                        source=row.get("Source") or None,
                    )
                    count += 1
                except (ArithmeticError, ValueError) as e:
                    logger.warning(f"Failed to create emission factor from row {row}: {e}")
                    errors.append(f"factor row {row}: {e}")

        logger.info(f"Created {count} emission factors")
        return count

    async def seed_demo_admin(
        self, email: str, organization_name: str, fiscal_id: str
    ) -> UserDBModel:
        """
        Ensure a demo organization with an admin user exists.

        Returns:
            The admin user
        """
        organizations = OrganizationRepository(self.session)
        users = UserRepository(self.session)

        organization = await organizations.get_by_fiscal_id(fiscal_id)
        if organization is None:
            organization = await organizations.create(
                legal_name=organization_name, fiscal_id=fiscal_id
            )
            logger.info(f"Created demo organization {organization.id}")

        user = await users.get_by_email(email)
        if user is None:
            user = await users.create(
                email=email,
                full_name="Demo Admin",
                organization_id=organization.id,
                role=UserRole.ADMIN.value,
            )
            logger.info(f"Created demo admin {user.id}")
        else:
            user = await users.apply(
                user, organization_id=organization.id, role=UserRole.ADMIN.value
            )
        return user
