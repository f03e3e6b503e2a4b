"""
Verification lifecycle of a data entry.

Manual entries start ``pending``. Entries read from a document start
``pending`` only when the extraction was confident, otherwise
``action_required``. Review moves an entry to ``verified`` or back to
``action_required`` from any state.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import DataEntryRepository
from carbon_ledger.database.schemas import DataEntryDBModel
from carbon_ledger.services.calculators.co2e_calculator import (
    CO2eCalculator,
    EmissionAssessment,
)
from carbon_ledger.services.data_entries.updates import EntryField, EntryUpdate
from carbon_ledger.services.exceptions import InvalidInputError
from carbon_ledger.utils.constants import ConfidenceLevel, VerificationStatus

logger = logging.getLogger(__name__)


def initial_status(
    confidence: Optional[Union[ConfidenceLevel, str]] = None,
) -> VerificationStatus:
    """
    Status a new entry starts in.

    Args:
        confidence: Extraction confidence, None for manual entries

    Returns:
        PENDING for manual or high-confidence entries, ACTION_REQUIRED otherwise
    """
    if confidence is None:
        return VerificationStatus.PENDING
    if ConfidenceLevel(confidence) == ConfidenceLevel.HIGH:
        return VerificationStatus.PENDING
    return VerificationStatus.ACTION_REQUIRED


def verification_columns(reviewer_id: UUID) -> dict[str, Any]:
    return {
        "verification_status": VerificationStatus.VERIFIED.value,
        "verified_by_user_id": reviewer_id,
        "verified_at": datetime.utcnow(),
    }


class EntryLifecycle:
    """
    Applies review decisions and edits to persisted entries.

    Every change that touches quantity, unit or category goes back through
    factor resolution so the stored CO2e always matches the stored quantity.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = DataEntryRepository(session)
        self.calculator = CO2eCalculator(session)

    async def verify(self, entry: DataEntryDBModel, reviewer_id: UUID) -> DataEntryDBModel:
        """
        Mark an entry verified by ``reviewer_id``.

        Allowed from any state; re-verifying refreshes ``verified_at``.
        """
        entry = await self.repo.apply(entry, **verification_columns(reviewer_id))
        logger.info(f"Data entry {entry.id} verified by {reviewer_id}")
        return entry

    async def reject(
        self, entry: DataEntryDBModel, notes: Optional[str] = None
    ) -> DataEntryDBModel:
        """
        Send an entry back for correction.

        ``notes`` replaces the existing notes when given. The previous
        reviewer and review time are kept.
        """
        columns: dict[str, Any] = {
            "verification_status": VerificationStatus.ACTION_REQUIRED.value
        }
        if notes is not None:
            columns["notes"] = notes

        entry = await self.repo.apply(entry, **columns)
        logger.info(f"Data entry {entry.id} marked action required")
        return entry

    async def update(
        self, entry: DataEntryDBModel, changes: EntryUpdate, editor_id: UUID
    ) -> DataEntryDBModel:
        """
        Apply a partial update.

        Args:
            entry: Persisted entry
            changes: Fields to change
            editor_id: User making the change, recorded as reviewer when the
                update marks the entry verified

        Returns:
            The updated entry

        Raises:
            InvalidInputError: The update carries no changes
        """
        if changes.is_empty:
            raise InvalidInputError("No fields to update")

        columns = changes.columns()

        if changes.touches_emissions:
            assessment = await self.calculator.assess(
                category_id=changes.get(EntryField.CATEGORY_ID, entry.category_id),
                unit=changes.get(EntryField.UNIT, entry.unit),
                quantity=changes.get(EntryField.QUANTITY, entry.quantity),
            )
            columns.update(EmissionAssessment.columns(assessment))
            logger.info(
                f"Recomputed data entry {entry.id}: "
                f"{columns['co2e_kg'] if assessment else 'no applicable factor'}"
            )

        if changes.verification_status == VerificationStatus.VERIFIED:
            columns.update(verification_columns(editor_id))
        elif changes.verification_status is not None:
            columns["verification_status"] = changes.verification_status.value

        entry = await self.repo.apply(entry, **columns)
        logger.info(f"Data entry {entry.id} updated: {sorted(columns)}")
        return entry
