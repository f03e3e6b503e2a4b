"""
API tests for the data entries endpoints.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from carbon_ledger.test.factory.data_entry import DataEntryFactory
from carbon_ledger.test.factory.emission_factor import (
    EmissionCategoryFactory,
    EmissionFactorFactory,
)
from carbon_ledger.test.factory.facility import FacilityFactory
from carbon_ledger.test.helpers import auth_headers, create_electricity, create_member
from carbon_ledger.utils.constants import Scope, UserRole

URL = "/api/v1/data-entries"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def upload(category, content_type="image/png", **form):
    return {
        "files": {"file": ("bill.png", PNG_BYTES, content_type)},
        "data": {"category": category, **form},
    }


@pytest.mark.asyncio
async def test_requests_without_token_are_rejected(test_async_client):
    """Test every entry endpoint needs a bearer token."""
    response = await test_async_client.get(f"{URL}/")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    response = await test_async_client.get(
        f"{URL}/", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_data_entry(test_async_client):
    """Test manual creation computes CO2e from the applicable factor."""
    user = await create_member()
    category, factor = await create_electricity()

    response = await test_async_client.post(
        f"{URL}/",
        json={
            "category_id": str(category.id),
            "entry_date": "2024-03-31",
            "quantity": "450",
            "unit": "kWh",
            "vendor_name": "City Power",
        },
        headers=auth_headers(user),
    )
    assert response.status_code == 201

    data = response.json()
    assert data["organization_id"] == str(user.organization_id)
    assert data["created_by_user_id"] == str(user.id)
    assert data["verification_status"] == "pending"
    assert data["emission_factor_id"] == str(factor.id)
    assert Decimal(data["co2e_kg"]) == Decimal("225")
    assert data["confidence_level"] is None


@pytest.mark.asyncio
async def test_create_data_entry_validation(test_async_client):
    """Test negative quantities are refused before reaching the service."""
    user = await create_member()
    category, _ = await create_electricity()

    response = await test_async_client.post(
        f"{URL}/",
        json={
            "category_id": str(category.id),
            "entry_date": "2024-03-31",
            "quantity": "-1",
            "unit": "kWh",
        },
        headers=auth_headers(user),
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


@pytest.mark.asyncio
async def test_create_data_entry_with_unknown_facility(test_async_client):
    """Test entries can only point at the organization's own facilities."""
    user = await create_member()
    category, _ = await create_electricity()

    response = await test_async_client.post(
        f"{URL}/",
        json={
            "category_id": str(category.id),
            "entry_date": "2024-03-31",
            "quantity": "1",
            "unit": "kWh",
            "facility_id": str(uuid4()),
        },
        headers=auth_headers(user),
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Facility not found or access denied"


@pytest.mark.asyncio
async def test_data_entry_with_unknown_category(test_async_client):
    """Test create and update refuse a category that does not exist."""
    user = await create_member()
    category, _ = await create_electricity()
    entry = await DataEntryFactory(organization_id=user.organization_id, category_id=category.id)
    headers = auth_headers(user)

    response = await test_async_client.post(
        f"{URL}/",
        json={
            "category_id": str(uuid4()),
            "entry_date": "2024-03-31",
            "quantity": "1",
            "unit": "kWh",
        },
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Emission category not found"

    response = await test_async_client.put(
        f"{URL}/{entry.id}", json={"category_id": str(uuid4())}, headers=headers
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Emission category not found"


@pytest.mark.asyncio
async def test_process_electricity_document(test_async_client, test_storage):
    """Test a confident extraction becomes a pending entry with CO2e."""
    user = await create_member()
    _, factor = await create_electricity()
    facility = await FacilityFactory(organization_id=user.organization_id)

    response = await test_async_client.post(
        f"{URL}/process-document",
        **upload("electricity", facility_id=str(facility.id)),
        headers=auth_headers(user),
    )
    assert response.status_code == 200

    data = response.json()
    assert data["message"] == "Document processed successfully"
    assert data["ocr_result"]["vendor"] == "Green Energy Corp"
    assert data["ocr_result"]["confidence"] == "high"

    entry = data["data_entry"]
    assert entry["facility_id"] == str(facility.id)
    assert entry["unit"] == "kWh"
    assert entry["verification_status"] == "pending"
    assert entry["confidence_level"] == "high"
    assert entry["emission_factor_id"] == str(factor.id)
    assert Decimal(entry["co2e_kg"]) == Decimal("225")
    assert entry["document_url"] == f"http://testserver/files/{entry['document_filename']}"
    assert (test_storage.root / entry["document_filename"]).exists()


@pytest.mark.asyncio
async def test_process_water_document_without_factor(test_async_client):
    """Test a document without an applicable factor leaves CO2e empty."""
    user = await create_member()
    water = await EmissionCategoryFactory(name="Water", scope=Scope.SCOPE_3)
    await EmissionFactorFactory(category_id=water.id, unit="liters")

    response = await test_async_client.post(
        f"{URL}/process-document", **upload("water"), headers=auth_headers(user)
    )
    assert response.status_code == 200

    entry = response.json()["data_entry"]
    assert entry["unit"] == "m³"
    assert entry["category_id"] == str(water.id)
    assert entry["emission_factor_id"] is None
    assert entry["co2e_kg"] is None


@pytest.mark.asyncio
async def test_process_fuel_document_needs_review(test_async_client):
    """Test a medium confidence extraction starts as action required."""
    user = await create_member()
    fuel = await EmissionCategoryFactory(name="Fuel", scope=Scope.SCOPE_1)
    await EmissionFactorFactory(
        category_id=fuel.id, unit="liters", co2e_per_unit=Decimal("2")
    )

    response = await test_async_client.post(
        f"{URL}/process-document", **upload("fuel"), headers=auth_headers(user)
    )
    assert response.status_code == 200

    entry = response.json()["data_entry"]
    assert entry["verification_status"] == "action_required"
    assert entry["confidence_level"] == "medium"
    assert Decimal(entry["co2e_kg"]) == Decimal("171")


@pytest.mark.asyncio
async def test_process_document_rejects_bad_uploads(test_async_client):
    """Test file type and category checks."""
    user = await create_member()
    await create_electricity()
    headers = auth_headers(user)

    response = await test_async_client.post(
        f"{URL}/process-document",
        **upload("electricity", content_type="text/plain"),
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid file type. Only PDF, JPG, and PNG are allowed"

    response = await test_async_client.post(
        f"{URL}/process-document", **upload("steam"), headers=headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Unsupported category: steam"

    response = await test_async_client.post(
        f"{URL}/process-document", **upload("diesel"), headers=headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Category not found for: diesel"


@pytest.mark.asyncio
async def test_list_data_entries_filters(test_async_client):
    """Test listing is scoped to the organization and filterable."""
    user = await create_member()
    outsider = await create_member()
    category, _ = await create_electricity()
    facility = await FacilityFactory(organization_id=user.organization_id)

    await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        facility_id=facility.id,
        entry_date=date(2024, 2, 1),
    )
    await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        entry_date=date(2024, 3, 1),
        verification_status="verified",
    )
    await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        entry_date=date(2023, 12, 1),
    )
    await DataEntryFactory(organization_id=outsider.organization_id, category_id=category.id)
    headers = auth_headers(user)

    response = await test_async_client.get(f"{URL}/", headers=headers)
    assert response.status_code == 200
    assert [item["entry_date"] for item in response.json()] == [
        "2024-03-01",
        "2024-02-01",
        "2023-12-01",
    ]

    response = await test_async_client.get(
        f"{URL}/", params={"facility_id": str(facility.id)}, headers=headers
    )
    assert [item["entry_date"] for item in response.json()] == ["2024-02-01"]

    response = await test_async_client.get(
        f"{URL}/", params={"status": "verified"}, headers=headers
    )
    assert [item["entry_date"] for item in response.json()] == ["2024-03-01"]

    response = await test_async_client.get(
        f"{URL}/",
        params={"start_date": "2024-01-01", "end_date": "2024-02-28"},
        headers=headers,
    )
    assert [item["entry_date"] for item in response.json()] == ["2024-02-01"]


@pytest.mark.asyncio
async def test_get_data_entry_of_other_organization(test_async_client):
    """Test another tenant's entry looks like it does not exist."""
    user = await create_member()
    outsider = await create_member()
    category, _ = await create_electricity()
    entry = await DataEntryFactory(
        organization_id=outsider.organization_id, category_id=category.id
    )

    response = await test_async_client.get(f"{URL}/{entry.id}", headers=auth_headers(user))
    assert response.status_code == 404
    assert response.json()["detail"] == "Data entry not found"

    response = await test_async_client.get(
        f"{URL}/{entry.id}", headers=auth_headers(outsider)
    )
    assert response.status_code == 200
    assert response.json()["id"] == str(entry.id)


@pytest.mark.asyncio
async def test_update_data_entry(test_async_client):
    """Test partial updates recompute CO2e and clear optional fields."""
    user = await create_member()
    category, factor = await create_electricity()
    entry = await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        quantity=Decimal("100"),
        notes="first reading",
        emission_factor_id=factor.id,
        co2e_kg=Decimal("50"),
    )
    headers = auth_headers(user)

    response = await test_async_client.put(
        f"{URL}/{entry.id}", json={"quantity": "450", "notes": None}, headers=headers
    )
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["co2e_kg"]) == Decimal("225")
    assert data["notes"] is None
    assert data["vendor_name"] == "Test Utility"

    response = await test_async_client.put(
        f"{URL}/{entry.id}", json={"unit": "therms"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["co2e_kg"] is None
    assert response.json()["emission_factor_id"] is None


@pytest.mark.asyncio
async def test_update_data_entry_rejections(test_async_client):
    """Test empty updates, cleared required fields and foreign facilities."""
    user = await create_member()
    outsider = await create_member()
    foreign_facility = await FacilityFactory(organization_id=outsider.organization_id)
    category, _ = await create_electricity()
    entry = await DataEntryFactory(organization_id=user.organization_id, category_id=category.id)
    headers = auth_headers(user)

    response = await test_async_client.put(f"{URL}/{entry.id}", json={}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "No fields to update"

    response = await test_async_client.put(
        f"{URL}/{entry.id}", json={"unit": None}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "unit cannot be cleared"

    response = await test_async_client.put(
        f"{URL}/{entry.id}", json={"facility_id": str(foreign_facility.id)}, headers=headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_verify_and_reject_data_entry(test_async_client):
    """Test the review workflow keeps the last reviewer on rejection."""
    user = await create_member()
    reviewer = await create_member(organization_id=user.organization_id, role=UserRole.MANAGER)
    category, _ = await create_electricity()
    entry = await DataEntryFactory(organization_id=user.organization_id, category_id=category.id)

    response = await test_async_client.put(
        f"{URL}/{entry.id}/verify", headers=auth_headers(reviewer)
    )
    assert response.status_code == 200
    data = response.json()
    assert data["verification_status"] == "verified"
    assert data["verified_by_user_id"] == str(reviewer.id)
    assert data["verified_at"] is not None

    response = await test_async_client.put(
        f"{URL}/{entry.id}/reject",
        json={"notes": "Meter number does not match"},
        headers=auth_headers(user),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["verification_status"] == "action_required"
    assert data["notes"] == "Meter number does not match"
    assert data["verified_by_user_id"] == str(reviewer.id)

    # rejecting without a body keeps the notes
    response = await test_async_client.put(
        f"{URL}/{entry.id}/reject", headers=auth_headers(user)
    )
    assert response.status_code == 200
    assert response.json()["notes"] == "Meter number does not match"


@pytest.mark.asyncio
async def test_delete_data_entry_removes_document(test_async_client, test_storage):
    """Test deleting a document-backed entry also deletes the file."""
    user = await create_member()
    await create_electricity()
    headers = auth_headers(user)

    response = await test_async_client.post(
        f"{URL}/process-document", **upload("electricity"), headers=headers
    )
    entry = response.json()["data_entry"]
    stored = test_storage.root / entry["document_filename"]
    assert stored.exists()

    response = await test_async_client.delete(f"{URL}/{entry['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Data entry deleted successfully"}
    assert not stored.exists()

    response = await test_async_client.get(f"{URL}/{entry['id']}", headers=headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_data_entry_stats(test_async_client):
    """Test yearly statistics for the caller's organization."""
    user = await create_member()
    category, factor = await create_electricity()
    facility = await FacilityFactory(organization_id=user.organization_id)
    await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        facility_id=facility.id,
        entry_date=date(2024, 4, 1),
        emission_factor_id=factor.id,
        co2e_kg=Decimal("50"),
        verification_status="verified",
    )
    await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        entry_date=date(2024, 5, 1),
        emission_factor_id=factor.id,
        co2e_kg=Decimal("25"),
    )

    response = await test_async_client.get(
        f"{URL}/stats", params={"year": 2024}, headers=auth_headers(user)
    )
    assert response.status_code == 200

    data = response.json()
    assert data["year"] == 2024
    assert data["total_entries"] == 2
    assert Decimal(data["total_emissions_kg"]) == Decimal("75")
    assert data["facilities_with_data"] == 1
    assert data["verified_entries"] == 1
    assert data["action_required_entries"] == 0
