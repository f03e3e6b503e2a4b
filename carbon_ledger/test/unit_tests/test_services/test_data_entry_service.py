"""
Service tests for data entry creation, ingestion and statistics.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from carbon_ledger.pydantic_models.data_entry import DataEntryCreate
from carbon_ledger.services.data_entries import DataEntryService, EntryField, EntryUpdate
from carbon_ledger.services.data_entries.service import validate_document
from carbon_ledger.services.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from carbon_ledger.services.extraction.mock import MockExtractor
from carbon_ledger.test.factory.data_entry import DataEntryFactory
from carbon_ledger.test.factory.emission_factor import EmissionCategoryFactory
from carbon_ledger.test.factory.facility import FacilityFactory
from carbon_ledger.test.factory.organization import UserFactory
from carbon_ledger.test.helpers import create_electricity, create_member
from carbon_ledger.utils.constants import VerificationStatus

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def service(session, storage=None):
    return DataEntryService(session, storage=storage, extractor=MockExtractor())


def test_validate_document_rejects_unknown_type():
    with pytest.raises(InvalidInputError, match="Only PDF, JPG, and PNG"):
        validate_document("text/plain", 10, "electricity")


def test_validate_document_rejects_large_files():
    with pytest.raises(InvalidInputError, match="25MB"):
        validate_document("application/pdf", 25 * 1024 * 1024 + 1, "electricity")


def test_validate_document_rejects_unknown_category():
    with pytest.raises(InvalidInputError, match="Unsupported category: steam"):
        validate_document("image/png", 10, "steam")


@pytest.mark.asyncio
async def test_create_assesses_and_starts_pending(test_db_session):
    user = await create_member()
    category, factor = await create_electricity()

    entry = await service(test_db_session).create(
        user,
        DataEntryCreate(
            category_id=category.id,
            entry_date=date(2024, 5, 1),
            quantity=Decimal("450"),
            unit="kWh",
        ),
    )

    assert entry.organization_id == user.organization_id
    assert entry.created_by_user_id == user.id
    assert entry.verification_status == VerificationStatus.PENDING.value
    assert entry.emission_factor_id == factor.id
    assert Decimal(str(entry.co2e_kg)) == Decimal("225")


@pytest.mark.asyncio
async def test_create_stores_unrounded_co2e(test_db_session):
    user = await create_member()
    category, factor = await create_electricity(co2e_per_unit=Decimal("0.123457"))
    entry_service = service(test_db_session)

    entry = await entry_service.create(
        user,
        DataEntryCreate(
            category_id=category.id,
            entry_date=date(2024, 5, 1),
            quantity=Decimal("1.2345"),
            unit="kWh",
        ),
    )
    await test_db_session.commit()
    entry_id = entry.id
    test_db_session.expire_all()
    stored = await entry_service.get(user, entry_id)

    assert stored.emission_factor_id == factor.id
    assert Decimal(str(stored.co2e_kg)) == Decimal("0.1524076665")


@pytest.mark.asyncio
async def test_create_with_unknown_category(test_db_session):
    user = await create_member()

    with pytest.raises(NotFoundError, match="Emission category not found"):
        await service(test_db_session).create(
            user,
            DataEntryCreate(
                category_id=uuid4(),
                entry_date=date(2024, 5, 1),
                quantity=Decimal("1"),
                unit="kWh",
            ),
        )


@pytest.mark.asyncio
async def test_update_with_unknown_category(test_db_session):
    user = await create_member()
    category, _ = await create_electricity()
    entry = await DataEntryFactory(organization_id=user.organization_id, category_id=category.id)

    with pytest.raises(NotFoundError, match="Emission category not found"):
        await service(test_db_session).update(
            user, entry.id, EntryUpdate({EntryField.CATEGORY_ID: uuid4()})
        )


@pytest.mark.asyncio
async def test_create_without_factor_leaves_pair_empty(test_db_session):
    user = await create_member()
    category, _ = await create_electricity(co2e_per_unit=None)

    entry = await service(test_db_session).create(
        user,
        DataEntryCreate(
            category_id=category.id,
            entry_date=date(2024, 5, 1),
            quantity=Decimal("450"),
            unit="kWh",
        ),
    )

    assert entry.emission_factor_id is None
    assert entry.co2e_kg is None


@pytest.mark.asyncio
async def test_create_requires_organization(test_db_session):
    user = await UserFactory()
    category, _ = await create_electricity()

    with pytest.raises(ForbiddenError):
        await service(test_db_session).create(
            user,
            DataEntryCreate(
                category_id=category.id,
                entry_date=date(2024, 5, 1),
                quantity=Decimal("1"),
                unit="kWh",
            ),
        )


@pytest.mark.asyncio
async def test_create_rejects_foreign_facility(test_db_session):
    user = await create_member()
    outsider = await create_member()
    facility = await FacilityFactory(organization_id=outsider.organization_id)
    category, _ = await create_electricity()

    with pytest.raises(ForbiddenError, match="Facility not found or access denied"):
        await service(test_db_session).create(
            user,
            DataEntryCreate(
                facility_id=facility.id,
                category_id=category.id,
                entry_date=date(2024, 5, 1),
                quantity=Decimal("1"),
                unit="kWh",
            ),
        )


@pytest.mark.asyncio
async def test_process_document_stores_and_assesses(test_db_session, test_storage):
    user = await create_member()
    _, factor = await create_electricity()

    entry, extraction = await service(test_db_session, test_storage).process_document(
        user, PNG_BYTES, "bill.png", "image/png", "electricity", notes="from caller"
    )

    assert extraction.vendor == "Green Energy Corp"
    assert entry.quantity == Decimal("450")
    assert entry.emission_factor_id == factor.id
    assert Decimal(str(entry.co2e_kg)) == Decimal("225")
    assert entry.confidence_level == "high"
    assert entry.verification_status == VerificationStatus.PENDING.value
    # extraction notes win over caller notes
    assert entry.notes == "Quarterly sustainability check required."
    assert entry.document_filename.startswith(
        f"organizations/{user.organization_id}/documents/"
    )
    assert entry.document_filename.endswith(".png")
    assert entry.document_url.endswith(entry.document_filename)


@pytest.mark.asyncio
async def test_process_document_medium_confidence_needs_action(test_db_session, test_storage):
    user = await create_member()
    await EmissionCategoryFactory(name="Fuel", scope=1)

    entry, _ = await service(test_db_session, test_storage).process_document(
        user, PNG_BYTES, "receipt.png", "image/png", "fuel"
    )

    assert entry.confidence_level == "medium"
    assert entry.verification_status == VerificationStatus.ACTION_REQUIRED.value
    assert entry.co2e_kg is None


@pytest.mark.asyncio
async def test_process_document_unknown_category(test_db_session, test_storage):
    user = await create_member()

    with pytest.raises(InvalidInputError, match="Category not found for: water"):
        await service(test_db_session, test_storage).process_document(
            user, PNG_BYTES, "bill.png", "image/png", "water"
        )


@pytest.mark.asyncio
async def test_process_document_needs_storage_and_extractor(test_db_session):
    user = await create_member()
    await create_electricity()

    with pytest.raises(RuntimeError, match="storage backend and an extractor"):
        await DataEntryService(test_db_session).process_document(
            user, PNG_BYTES, "bill.png", "image/png", "electricity"
        )


@pytest.mark.asyncio
async def test_get_hides_other_organizations(test_db_session):
    user = await create_member()
    outsider = await create_member()
    category, _ = await create_electricity()
    entry = await DataEntryFactory(
        organization_id=outsider.organization_id, category_id=category.id
    )

    with pytest.raises(NotFoundError, match="Data entry not found"):
        await service(test_db_session).get(user, entry.id)


@pytest.mark.asyncio
async def test_remove_survives_missing_document(test_db_session, test_storage):
    user = await create_member()
    category, _ = await create_electricity()
    entry = await DataEntryFactory(
        organization_id=user.organization_id,
        category_id=category.id,
        document_filename="organizations/missing.png",
    )

    entry_service = service(test_db_session, test_storage)
    await entry_service.remove(user, entry.id)

    with pytest.raises(NotFoundError):
        await entry_service.get(user, entry.id)


@pytest.mark.asyncio
async def test_stats_counts_one_year(test_db_session):
    user = await create_member()
    facility = await FacilityFactory(organization_id=user.organization_id)
    category, factor = await create_electricity()
    common = dict(organization_id=user.organization_id, category_id=category.id)

    await DataEntryFactory(
        **common,
        facility_id=facility.id,
        entry_date=date(2024, 1, 15),
        emission_factor_id=factor.id,
        co2e_kg=Decimal("50"),
        verification_status=VerificationStatus.VERIFIED.value,
    )
    await DataEntryFactory(
        **common,
        entry_date=date(2024, 12, 31),
        verification_status=VerificationStatus.ACTION_REQUIRED.value,
    )
    await DataEntryFactory(
        **common,
        facility_id=facility.id,
        entry_date=date(2023, 6, 1),
        emission_factor_id=factor.id,
        co2e_kg=Decimal("25"),
    )

    stats = await service(test_db_session).stats(user, year=2024)

    assert stats.total_entries == 2
    assert stats.total_emissions_kg == Decimal("50")
    assert stats.facilities_with_data == 1
    assert stats.verified_entries == 1
    assert stats.action_required_entries == 1


@pytest.mark.asyncio
async def test_stats_for_empty_year(test_db_session):
    user = await create_member()

    stats = await service(test_db_session).stats(user, year=2020)

    assert stats.total_entries == 0
    assert stats.total_emissions_kg == Decimal("0")
