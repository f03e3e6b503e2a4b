"""
Organizations API router.

Organization profile, members and invitations.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import get_current_user, get_db_session
from carbon_ledger.database.schemas import UserDBModel
from carbon_ledger.pydantic_models.common import MessageResponse
from carbon_ledger.pydantic_models.organization import (
    InviteCodePydModel,
    InviteUserRequest,
    InviteUserResult,
    OrganizationCreate,
    OrganizationPydModel,
    OrganizationUpdate,
    OrganizationUserPydModel,
    UpdateUserRoleRequest,
)
from carbon_ledger.services.organizations import OrganizationService

router = APIRouter(
    prefix="/api/v1/organizations",
    tags=["Organizations"],
)

logger = logging.getLogger(__name__)


@router.post("/", response_model=OrganizationPydModel, status_code=status.HTTP_201_CREATED)
async def create_organization(
    payload: OrganizationCreate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create an organization; the caller becomes its administrator."""
    return await OrganizationService(session).create(user, payload)


@router.get("/me", response_model=OrganizationPydModel)
async def get_my_organization(
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await OrganizationService(session).find_by_user(user)


@router.get("/{organization_id}", response_model=OrganizationPydModel)
async def get_organization(
    organization_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await OrganizationService(session).find_one(user, organization_id)


@router.put("/{organization_id}", response_model=OrganizationPydModel)
async def update_organization(
    organization_id: UUID,
    payload: OrganizationUpdate,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await OrganizationService(session).update(user, organization_id, payload)


@router.get("/{organization_id}/users", response_model=list[OrganizationUserPydModel])
async def list_organization_users(
    organization_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await OrganizationService(session).list_users(user, organization_id)


@router.post("/{organization_id}/invite", response_model=InviteUserResult)
async def invite_user(
    organization_id: UUID,
    payload: InviteUserRequest,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Add an existing user, or leave a pending invitation for a new one."""
    return await OrganizationService(session).invite_user(user, organization_id, payload)


@router.put("/{organization_id}/users/{user_id}/role", response_model=MessageResponse)
async def update_user_role(
    organization_id: UUID,
    user_id: UUID,
    payload: UpdateUserRoleRequest,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await OrganizationService(session).update_user_role(
        user, organization_id, user_id, payload
    )
    return MessageResponse(message="User role updated successfully")


@router.delete("/{organization_id}/users/{user_id}", response_model=MessageResponse)
async def remove_user(
    organization_id: UUID,
    user_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await OrganizationService(session).remove_user(user, organization_id, user_id)
    return MessageResponse(message="User removed from organization successfully")


@router.post("/{organization_id}/invite-code", response_model=InviteCodePydModel)
async def generate_invite_code(
    organization_id: UUID,
    user: UserDBModel = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await OrganizationService(session).generate_invite_code(user, organization_id)
