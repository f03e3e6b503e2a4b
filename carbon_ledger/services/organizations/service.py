"""
Organization service: tenancy, membership and invitations.
"""

import logging
import secrets
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import OrganizationRepository, UserRepository
from carbon_ledger.database.schemas import OrganizationDBModel, UserDBModel
from carbon_ledger.pydantic_models.organization import (
    InviteCodePydModel,
    InviteUserRequest,
    InviteUserResult,
    OrganizationCreate,
    OrganizationPydModel,
    OrganizationUpdate,
    UpdateUserRoleRequest,
)
from carbon_ledger.services.access import require_admin_of
from carbon_ledger.services.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from carbon_ledger.utils.constants import INVITE_CODE_EXPIRY, UserRole

logger = logging.getLogger(__name__)


class OrganizationService:
    """
    Service for organizations and their members.

    Membership lives on the user row (``organization_id`` and ``role``), so
    joining, leaving and role changes are user updates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = OrganizationRepository(session)
        self.users = UserRepository(session)

    async def _with_counts(self, organization: OrganizationDBModel) -> OrganizationPydModel:
        result = OrganizationPydModel.model_validate(organization)
        result.member_count = await self.repo.count_active_members(organization.id)
        result.facility_count = await self.repo.count_active_facilities(organization.id)
        return result

    async def create(
        self, user: UserDBModel, payload: OrganizationCreate
    ) -> OrganizationPydModel:
        """
        Create an organization with ``user`` as its administrator.

        The organization row and the creator's membership are written in the
        same transaction.

        Raises:
            ConflictError: User already belongs to an organization, or the
                fiscal id is taken
        """
        if user.organization_id is not None:
            raise ConflictError("User already belongs to an organization")
        if await self.repo.get_by_fiscal_id(payload.fiscal_id):
            raise ConflictError("An organization with this fiscal ID already exists")

        data = payload.model_dump()
        for key in ("default_currency", "distance_unit", "volume_unit"):
            data[key] = data[key].value

        organization = await self.repo.create(**data)
        creator = await self.users.get_by_id(user.id)
        await self.users.apply(
            creator, organization_id=organization.id, role=UserRole.ADMIN.value
        )
        logger.info(f"Organization {organization.id} created by {user.id}")
        return await self._with_counts(organization)

    async def find_by_user(self, user: UserDBModel) -> OrganizationPydModel:
        if user.organization_id is None:
            raise NotFoundError("User does not belong to any organization")
        organization = await self.repo.get_by_id(user.organization_id)
        if organization is None:
            raise NotFoundError("User does not belong to any organization")
        return await self._with_counts(organization)

    async def find_one(
        self, user: UserDBModel, organization_id: UUID
    ) -> OrganizationPydModel:
        if user.organization_id != organization_id:
            raise ForbiddenError("User does not belong to this organization")
        organization = await self.repo.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        return await self._with_counts(organization)

    async def update(
        self, user: UserDBModel, organization_id: UUID, payload: OrganizationUpdate
    ) -> OrganizationPydModel:
        require_admin_of(user, organization_id)

        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not data:
            raise InvalidInputError("No fields to update")
        for key in ("default_currency", "distance_unit", "volume_unit"):
            if key in data:
                data[key] = data[key].value

        organization = await self.repo.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        organization = await self.repo.apply(organization, **data)
        logger.info(f"Organization {organization_id} updated: {sorted(data)}")
        return await self._with_counts(organization)

    async def list_users(
        self, user: UserDBModel, organization_id: UUID
    ) -> List[UserDBModel]:
        if user.organization_id != organization_id:
            raise ForbiddenError("User does not belong to this organization")
        return await self.users.list_by_organization(organization_id)

    async def _get_member(self, organization_id: UUID, user_id: UUID) -> UserDBModel:
        member = await self.users.get_in_organization(user_id, organization_id)
        if member is None:
            raise NotFoundError("User not found in this organization")
        return member

    async def update_user_role(
        self,
        admin: UserDBModel,
        organization_id: UUID,
        target_user_id: UUID,
        payload: UpdateUserRoleRequest,
    ) -> None:
        require_admin_of(admin, organization_id)
        if target_user_id == admin.id:
            raise ForbiddenError("Cannot change your own role")

        member = await self._get_member(organization_id, target_user_id)
        data = {"role": payload.role.value}
        if "job_title" in payload.model_fields_set:
            data["job_title"] = payload.job_title

        await self.users.apply(member, **data)
        logger.info(f"User {member.id} role set to {payload.role.value} by {admin.id}")

    async def remove_user(
        self, admin: UserDBModel, organization_id: UUID, target_user_id: UUID
    ) -> None:
        require_admin_of(admin, organization_id)
        if target_user_id == admin.id:
            raise ForbiddenError("Cannot remove yourself from the organization")

        member = await self._get_member(organization_id, target_user_id)
        await self.users.apply(member, organization_id=None)
        logger.info(f"User {member.id} removed from organization {organization_id}")

    async def invite_user(
        self, admin: UserDBModel, organization_id: UUID, payload: InviteUserRequest
    ) -> InviteUserResult:
        """
        Add an existing, unaffiliated user to the organization.

        Unknown emails get a pending invitation; they join once registered.

        Raises:
            ConflictError: The user already belongs to an organization
        """
        require_admin_of(admin, organization_id)

        existing = await self.users.get_by_email(payload.email)
        if existing is None:
            logger.info(f"Invitation to {payload.email} for organization {organization_id}")
            return InviteUserResult(
                message="Invitation sent successfully",
                note="User will be added when they register",
                email=payload.email,
            )

        if existing.organization_id is not None:
            raise ConflictError("User already belongs to an organization")

        await self.users.apply(
            existing,
            organization_id=organization_id,
            role=payload.role.value,
            job_title=payload.job_title,
        )
        logger.info(f"User {existing.id} added to organization {organization_id}")
        return InviteUserResult(
            message="User added to organization successfully", user_id=existing.id
        )

    async def generate_invite_code(
        self, admin: UserDBModel, organization_id: UUID
    ) -> InviteCodePydModel:
        # TODO: persist codes with an expiry so they can be redeemed
        require_admin_of(admin, organization_id)
        return InviteCodePydModel(
            invite_code=secrets.token_hex(16), expires_in=INVITE_CODE_EXPIRY
        )
