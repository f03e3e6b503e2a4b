"""
Data Entries API router.

Manual entries, document ingestion, review and yearly statistics. All
routes act on the caller's organization.
"""
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import (
    get_current_user,
    get_db_session,
    get_extractor,
    get_storage,
)
from carbon_ledger.database.schemas import UserDBModel
from carbon_ledger.pydantic_models.common import MessageResponse
from carbon_ledger.pydantic_models.data_entry import (
    DataEntryCreate,
    DataEntryPydModel,
    DataEntryReject,
    DataEntryStatsPydModel,
    DataEntryUpdate,
    ProcessDocumentResponse,
)
from carbon_ledger.services.data_entries import DataEntryService, EntryUpdate
from carbon_ledger.services.extraction import DocumentExtractor
from carbon_ledger.services.storage import DocumentStorage
from carbon_ledger.utils.constants import VerificationStatus

router = APIRouter(
    prefix="/api/v1/data-entries",
    tags=["Data Entries"],
)

logger = logging.getLogger(__name__)


@router.post("/process-document", response_model=ProcessDocumentResponse)
async def process_document(
    file: UploadFile = File(...),
    category: str = Form(..., description="electricity, water, fuel, natural_gas or diesel"),
    facility_id: Optional[UUID] = Form(None),
    notes: Optional[str] = Form(None),
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    storage: DocumentStorage = Depends(get_storage),
    extractor: DocumentExtractor = Depends(get_extractor),
):
    """
    Upload a utility document and create an entry from what it says.

    Confident extractions start pending; anything else needs action.
    """
    data = await file.read()
    service = DataEntryService(session, storage=storage, extractor=extractor)
    entry, extraction = await service.process_document(
        user,
        data=data,
        filename=file.filename or "document",
        content_type=file.content_type,
        category=category,
        facility_id=facility_id,
        notes=notes,
    )
    return ProcessDocumentResponse(
        data_entry=DataEntryPydModel.model_validate(entry), ocr_result=extraction
    )


@router.post("/", response_model=DataEntryPydModel, status_code=status.HTTP_201_CREATED)
async def create_data_entry(
    payload: DataEntryCreate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create an entry from manually entered values."""
    return await DataEntryService(session).create(user, payload)


@router.get("/", response_model=list[DataEntryPydModel])
async def list_data_entries(
    facility_id: Optional[UUID] = None,
    category_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    verification_status: Optional[VerificationStatus] = Query(None, alias="status"),
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    List the organization's entries, newest entry date first.

    Args:
        facility_id: Filter by facility (optional)
        category_id: Filter by emission category (optional)
        start_date: Earliest entry date, inclusive (optional)
        end_date: Latest entry date, inclusive (optional)
        status: Filter by verification status (optional)
    """
    return await DataEntryService(session).list(
        user,
        facility_id=facility_id,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
        status=verification_status,
    )


@router.get("/stats", response_model=DataEntryStatsPydModel)
async def get_data_entry_stats(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Entry counts and total emissions for a year, the current one by default."""
    year = year or date.today().year
    stats = await DataEntryService(session).stats(user, year)
    return DataEntryStatsPydModel(year=year, **asdict(stats))


@router.get("/{entry_id}", response_model=DataEntryPydModel)
async def get_data_entry(
    entry_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await DataEntryService(session).get(user, entry_id)


@router.put("/{entry_id}", response_model=DataEntryPydModel)
async def update_data_entry(
    entry_id: UUID,
    payload: DataEntryUpdate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Change the fields present in the body.

    Changing quantity, unit or category recomputes CO2e.
    """
    changes = EntryUpdate.from_request(payload)
    return await DataEntryService(session).update(user, entry_id, changes)


@router.put("/{entry_id}/verify", response_model=DataEntryPydModel)
async def verify_data_entry(
    entry_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await DataEntryService(session).verify(user, entry_id)


@router.put("/{entry_id}/reject", response_model=DataEntryPydModel)
async def reject_data_entry(
    entry_id: UUID,
    payload: Optional[DataEntryReject] = None,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    notes = payload.notes if payload else None
    return await DataEntryService(session).reject(user, entry_id, notes)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_data_entry(
    entry_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    storage: DocumentStorage = Depends(get_storage),
):
    await DataEntryService(session, storage=storage).remove(user, entry_id)
    return MessageResponse(message="Data entry deleted successfully")
