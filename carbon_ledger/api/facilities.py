"""
Facilities API router.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import get_current_user, get_db_session
from carbon_ledger.database.schemas import UserDBModel
from carbon_ledger.pydantic_models.common import MessageResponse
from carbon_ledger.pydantic_models.facility import (
    FacilityCreate,
    FacilityPydModel,
    FacilityUpdate,
    GeocodeRequest,
    GeocodeResult,
)
from carbon_ledger.services.facilities import FacilityService

router = APIRouter(
    prefix="/api/v1/facilities",
    tags=["Facilities"],
)

logger = logging.getLogger(__name__)


@router.post("/", response_model=FacilityPydModel, status_code=status.HTTP_201_CREATED)
async def create_facility(
    payload: FacilityCreate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Register a facility. Admins and managers only.

    The grid region is detected from the coordinates when not given.
    """
    return await FacilityService(session).create(user, payload)


@router.get("/", response_model=list[FacilityPydModel])
async def list_facilities(
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await FacilityService(session).list(user)


@router.post("/geocode", response_model=GeocodeResult)
async def geocode_address(
    payload: GeocodeRequest,
    user: UserDBModel = Depends(get_current_user),
):
    """Look up coordinates and grid region for an address."""
    return FacilityService.geocode(payload.address)


@router.get("/{facility_id}", response_model=FacilityPydModel)
async def get_facility(
    facility_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await FacilityService(session).get(user, facility_id)


@router.put("/{facility_id}", response_model=FacilityPydModel)
async def update_facility(
    facility_id: UUID,
    payload: FacilityUpdate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await FacilityService(session).update(user, facility_id, payload)


@router.delete("/{facility_id}", response_model=MessageResponse)
async def delete_facility(
    facility_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Deactivate a facility. Its data entries are kept."""
    await FacilityService(session).remove(user, facility_id)
    return MessageResponse(message="Facility deleted successfully")
