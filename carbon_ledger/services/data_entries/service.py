"""
Data entry service.

Manual creation, document ingestion, listing, edits, review and yearly
statistics. Every operation runs inside the caller's request session and is
scoped to the caller's organization.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import (
    DataEntryRepository,
    EmissionCategoryRepository,
    EntryStats,
)
from carbon_ledger.database.schemas import DataEntryDBModel, UserDBModel
from carbon_ledger.pydantic_models.data_entry import DataEntryCreate
from carbon_ledger.pydantic_models.extraction import ExtractionResult
from carbon_ledger.services.access import require_facility, require_organization
from carbon_ledger.services.calculators.category_matcher import CategoryMatcher
from carbon_ledger.services.calculators.co2e_calculator import (
    CO2eCalculator,
    EmissionAssessment,
)
from carbon_ledger.services.data_entries.lifecycle import EntryLifecycle, initial_status
from carbon_ledger.services.data_entries.updates import EntryField, EntryUpdate
from carbon_ledger.services.exceptions import InvalidInputError, NotFoundError
from carbon_ledger.services.extraction import DocumentExtractor
from carbon_ledger.services.storage import DocumentStorage
from carbon_ledger.utils.constants import (
    ALLOWED_DOCUMENT_MIME_TYPES,
    MAX_DOCUMENT_SIZE_BYTES,
    ORGANIZATIONS_FOLDER,
    DocumentCategory,
    VerificationStatus,
)

logger = logging.getLogger(__name__)


def validate_document(content_type: Optional[str], size: int, category: str) -> None:
    """
    Check an upload before anything is stored.

    Raises:
        InvalidInputError: Unsupported type, too large or unknown category
    """
    if content_type not in ALLOWED_DOCUMENT_MIME_TYPES:
        raise InvalidInputError("Invalid file type. Only PDF, JPG, and PNG are allowed")
    if size > MAX_DOCUMENT_SIZE_BYTES:
        raise InvalidInputError("File size must not exceed 25MB")
    if category not in {c.value for c in DocumentCategory}:
        raise InvalidInputError(f"Unsupported category: {category}")


class DataEntryService:
    """
    Service for the data entry workflows.

    Storage and extraction backends are only needed for document ingestion
    and removal.
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[DocumentStorage] = None,
        extractor: Optional[DocumentExtractor] = None,
    ):
        self.session = session
        self.storage = storage
        self.extractor = extractor
        self.repo = DataEntryRepository(session)
        self.calculator = CO2eCalculator(session)
        self.lifecycle = EntryLifecycle(session)

    async def _require_category(self, category_id: UUID) -> None:
        if await EmissionCategoryRepository(self.session).get_by_id(category_id) is None:
            raise NotFoundError("Emission category not found")

    async def create(self, user: UserDBModel, payload: DataEntryCreate) -> DataEntryDBModel:
        """
        Create an entry from manually entered values.

        The entry starts ``pending``; CO2e is filled in when a factor applies.
        """
        organization_id = require_organization(user)
        if payload.facility_id:
            await require_facility(self.session, payload.facility_id, organization_id)
        await self._require_category(payload.category_id)

        assessment = await self.calculator.assess(
            payload.category_id, payload.unit, payload.quantity
        )

        entry = await self.repo.create(
            organization_id=organization_id,
            created_by_user_id=user.id,
            verification_status=initial_status().value,
            **payload.model_dump(),
            **EmissionAssessment.columns(assessment),
        )
        logger.info(
            f"Data entry {entry.id} created by {user.id}: {entry.quantity} {entry.unit}, "
            f"co2e_kg={entry.co2e_kg}"
        )
        return entry

    async def process_document(
        self,
        user: UserDBModel,
        data: bytes,
        filename: str,
        content_type: Optional[str],
        category: str,
        facility_id: Optional[UUID] = None,
        notes: Optional[str] = None,
    ) -> tuple[DataEntryDBModel, ExtractionResult]:
        """
        Store a document, extract its consumption data and create an entry.

        Args:
            user: Uploading user
            data: File contents
            filename: Name the file was uploaded with
            content_type: MIME type of the upload
            category: Consumption category (electricity, water, fuel, ...)
            facility_id: Facility the consumption belongs to
            notes: Caller notes, used when extraction reports none

        Returns:
            Tuple of (created entry, extraction result)

        Raises:
            InvalidInputError: Bad upload, or no emission category matches
        """
        if self.storage is None or self.extractor is None:
            raise RuntimeError(
                "Document processing needs a storage backend and an extractor"
            )
        validate_document(content_type, len(data), category)

        organization_id = require_organization(user)
        if facility_id:
            await require_facility(self.session, facility_id, organization_id)

        stored = await self.storage.upload(
            data, filename, ORGANIZATIONS_FOLDER, organization_id
        )
        extraction = await self.extractor.extract(data, content_type, category)

        emission_category = await CategoryMatcher(self.session).match(category)
        if emission_category is None:
            raise InvalidInputError(f"Category not found for: {category}")

        assessment = await self.calculator.assess(
            emission_category.id, extraction.unit, extraction.consumption
        )

        entry = await self.repo.create(
            organization_id=organization_id,
            facility_id=facility_id,
            category_id=emission_category.id,
            created_by_user_id=user.id,
            entry_date=extraction.date,
            quantity=extraction.consumption,
            unit=extraction.unit,
            document_filename=stored.filename,
            document_url=stored.url,
            vendor_name=extraction.vendor,
            total_cost=extraction.total_cost,
            notes=extraction.notes or notes,
            confidence_level=extraction.confidence.value,
            verification_status=initial_status(extraction.confidence).value,
            **EmissionAssessment.columns(assessment),
        )
        logger.info(
            f"Data entry {entry.id} created from document {stored.filename} "
            f"({extraction.confidence.value} confidence, {entry.verification_status})"
        )
        return entry, extraction

    async def list(
        self,
        user: UserDBModel,
        facility_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[VerificationStatus] = None,
    ) -> List[DataEntryDBModel]:
        organization_id = require_organization(user)
        return await self.repo.list_by_organization(
            organization_id,
            facility_id=facility_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
            status=status.value if status else None,
        )

    async def get(self, user: UserDBModel, entry_id: UUID) -> DataEntryDBModel:
        """
        Get one of the caller's organization's entries.

        Raises:
            NotFoundError: Absent or owned by another organization
        """
        organization_id = require_organization(user)
        entry = await self.repo.get_in_organization(entry_id, organization_id)
        if entry is None:
            raise NotFoundError("Data entry not found")
        return entry

    async def update(
        self, user: UserDBModel, entry_id: UUID, changes: EntryUpdate
    ) -> DataEntryDBModel:
        entry = await self.get(user, entry_id)

        facility_id = changes.get(EntryField.FACILITY_ID)
        if facility_id:
            await require_facility(self.session, facility_id, entry.organization_id)

        category_id = changes.get(EntryField.CATEGORY_ID)
        if category_id:
            await self._require_category(category_id)

        return await self.lifecycle.update(entry, changes, editor_id=user.id)

    async def verify(self, user: UserDBModel, entry_id: UUID) -> DataEntryDBModel:
        entry = await self.get(user, entry_id)
        return await self.lifecycle.verify(entry, reviewer_id=user.id)

    async def reject(
        self, user: UserDBModel, entry_id: UUID, notes: Optional[str] = None
    ) -> DataEntryDBModel:
        entry = await self.get(user, entry_id)
        return await self.lifecycle.reject(entry, notes)

    async def remove(self, user: UserDBModel, entry_id: UUID) -> None:
        """
        Delete an entry and, when possible, its stored document.

        A document that cannot be deleted is logged and left behind.
        """
        entry = await self.get(user, entry_id)

        if entry.document_filename and self.storage is not None:
            try:
                await self.storage.delete(entry.document_filename)
            except Exception as e:
                logger.error(
                    f"Failed to delete stored document {entry.document_filename}: {e}"
                )

        await self.repo.delete_in_organization(entry.id, entry.organization_id)
        logger.info(f"Data entry {entry.id} deleted by {user.id}")

    async def stats(self, user: UserDBModel, year: Optional[int] = None) -> EntryStats:
        organization_id = require_organization(user)
        return await self.repo.get_stats(organization_id, year or date.today().year)
