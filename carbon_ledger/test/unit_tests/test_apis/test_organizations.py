"""
API tests for the organizations endpoints.
"""

import pytest

from carbon_ledger.test.factory.facility import FacilityFactory
from carbon_ledger.test.factory.organization import OrganizationFactory, UserFactory
from carbon_ledger.test.helpers import auth_headers, create_member
from carbon_ledger.utils.constants import UserRole

URL = "/api/v1/organizations"


def organization_payload(**overrides):
    payload = {
        "legal_name": "Acme Manufacturing S.A.S.",
        "fiscal_id": "900123456-7",
        "industry_sector": "Manufacturing",
        "default_currency": "COP",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_organization_makes_creator_admin(test_async_client):
    """Test the creator joins the new organization as administrator."""
    user = await UserFactory()
    headers = auth_headers(user)

    response = await test_async_client.post(
        f"{URL}/", json=organization_payload(), headers=headers
    )
    assert response.status_code == 201

    data = response.json()
    assert data["legal_name"] == "Acme Manufacturing S.A.S."
    assert data["default_currency"] == "COP"
    assert data["distance_unit"] == "km"
    assert data["member_count"] == 1
    assert data["facility_count"] == 0

    response = await test_async_client.get(f"{URL}/{data['id']}/users", headers=headers)
    assert response.status_code == 200
    members = response.json()
    assert [(member["id"], member["role"]) for member in members] == [(str(user.id), "admin")]


@pytest.mark.asyncio
async def test_create_organization_conflicts(test_async_client):
    """Test members cannot create a second organization and fiscal ids are unique."""
    member = await create_member()
    response = await test_async_client.post(
        f"{URL}/", json=organization_payload(), headers=auth_headers(member)
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "User already belongs to an organization"

    await OrganizationFactory(fiscal_id="900123456-7")
    user = await UserFactory()
    response = await test_async_client.post(
        f"{URL}/", json=organization_payload(), headers=auth_headers(user)
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "An organization with this fiscal ID already exists"


@pytest.mark.asyncio
async def test_get_my_organization_with_counts(test_async_client):
    """Test member and facility counts only include active rows."""
    admin = await create_member(role=UserRole.ADMIN)
    await create_member(organization_id=admin.organization_id)
    await create_member(organization_id=admin.organization_id, is_active=False)
    await FacilityFactory(organization_id=admin.organization_id)
    await FacilityFactory(organization_id=admin.organization_id, is_active=False)

    response = await test_async_client.get(f"{URL}/me", headers=auth_headers(admin))
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == str(admin.organization_id)
    assert data["member_count"] == 2
    assert data["facility_count"] == 1


@pytest.mark.asyncio
async def test_get_my_organization_without_membership(test_async_client):
    """Test users without organization get a 404."""
    user = await UserFactory()

    response = await test_async_client.get(f"{URL}/me", headers=auth_headers(user))
    assert response.status_code == 404
    assert response.json()["detail"] == "User does not belong to any organization"


@pytest.mark.asyncio
async def test_get_other_organization_is_forbidden(test_async_client):
    """Test organizations are only visible to their members."""
    member = await create_member()
    other = await OrganizationFactory()

    response = await test_async_client.get(f"{URL}/{other.id}", headers=auth_headers(member))
    assert response.status_code == 403

    response = await test_async_client.get(
        f"{URL}/{member.organization_id}", headers=auth_headers(member)
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_organization(test_async_client):
    """Test only administrators update their organization."""
    admin = await create_member(role=UserRole.ADMIN)
    manager = await create_member(organization_id=admin.organization_id, role=UserRole.MANAGER)
    url = f"{URL}/{admin.organization_id}"

    response = await test_async_client.put(
        url,
        json={"legal_name": "Renamed Ltd", "volume_unit": "gallons"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["legal_name"] == "Renamed Ltd"
    assert response.json()["volume_unit"] == "gallons"

    response = await test_async_client.put(url, json={}, headers=auth_headers(admin))
    assert response.status_code == 400

    response = await test_async_client.put(
        url, json={"legal_name": "Hijacked"}, headers=auth_headers(manager)
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Only administrators can perform this action"


@pytest.mark.asyncio
async def test_invite_existing_user(test_async_client):
    """Test inviting an unaffiliated user adds them with the given role."""
    admin = await create_member(role=UserRole.ADMIN)
    invitee = await UserFactory(email="analyst@example.com")

    response = await test_async_client.post(
        f"{URL}/{admin.organization_id}/invite",
        json={"email": "Analyst@Example.com", "role": "manager", "job_title": "Analyst"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User added to organization successfully"
    assert response.json()["user_id"] == str(invitee.id)

    response = await test_async_client.get(
        f"{URL}/{admin.organization_id}/users", headers=auth_headers(admin)
    )
    roles = {member["id"]: (member["role"], member["job_title"]) for member in response.json()}
    assert roles[str(invitee.id)] == ("manager", "Analyst")


@pytest.mark.asyncio
async def test_invite_unknown_and_affiliated_users(test_async_client):
    """Test pending invitations and already affiliated users."""
    admin = await create_member(role=UserRole.ADMIN)
    taken = await create_member()
    url = f"{URL}/{admin.organization_id}/invite"

    response = await test_async_client.post(
        url, json={"email": "new@example.com", "role": "user"}, headers=auth_headers(admin)
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Invitation sent successfully"
    assert data["email"] == "new@example.com"
    assert data["user_id"] is None

    response = await test_async_client.post(
        url, json={"email": taken.email, "role": "user"}, headers=auth_headers(admin)
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_user_role(test_async_client):
    """Test role changes, including the self-change guard."""
    admin = await create_member(role=UserRole.ADMIN)
    member = await create_member(organization_id=admin.organization_id)
    outsider = await create_member()
    headers = auth_headers(admin)
    base = f"{URL}/{admin.organization_id}/users"

    response = await test_async_client.put(
        f"{base}/{member.id}/role", json={"role": "viewer"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json() == {"message": "User role updated successfully"}

    response = await test_async_client.put(
        f"{base}/{admin.id}/role", json={"role": "user"}, headers=headers
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Cannot change your own role"

    response = await test_async_client.put(
        f"{base}/{outsider.id}/role", json={"role": "user"}, headers=headers
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found in this organization"

    response = await test_async_client.put(
        f"{base}/{member.id}/role", json={"role": "owner"}, headers=headers
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_remove_user(test_async_client):
    """Test removal detaches the member without deleting them."""
    admin = await create_member(role=UserRole.ADMIN)
    member = await create_member(organization_id=admin.organization_id)
    headers = auth_headers(admin)
    base = f"{URL}/{admin.organization_id}/users"

    response = await test_async_client.delete(f"{base}/{admin.id}", headers=headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Cannot remove yourself from the organization"

    response = await test_async_client.delete(f"{base}/{member.id}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "User removed from organization successfully"}

    response = await test_async_client.get(f"{URL}/me", headers=auth_headers(member))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_generate_invite_code(test_async_client):
    """Test invite codes are random hex strings for administrators only."""
    admin = await create_member(role=UserRole.ADMIN)
    member = await create_member(organization_id=admin.organization_id)
    url = f"{URL}/{admin.organization_id}/invite-code"

    response = await test_async_client.post(url, headers=auth_headers(admin))
    assert response.status_code == 200
    data = response.json()
    assert len(data["invite_code"]) == 32
    int(data["invite_code"], 16)
    assert data["expires_in"] == "7 days"

    response = await test_async_client.post(url, headers=auth_headers(member))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_inactive_user_is_unauthorized(test_async_client):
    """Test a valid token for a deactivated user is refused."""
    user = await create_member(is_active=False)

    response = await test_async_client.get(f"{URL}/me", headers=auth_headers(user))
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or missing credentials"
