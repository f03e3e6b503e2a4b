"""
Service tests for emission category matching.
"""

from datetime import datetime, timedelta

import pytest

from carbon_ledger.services.calculators.category_matcher import CategoryMatcher
from carbon_ledger.test.factory.emission_factor import EmissionCategoryFactory
from carbon_ledger.utils.constants import Scope


@pytest.mark.asyncio
async def test_substring_match_ignores_case(test_db_session):
    electricity = await EmissionCategoryFactory(name="Electricity")

    category = await CategoryMatcher(test_db_session).match("electricity")

    assert category.id == electricity.id


@pytest.mark.asyncio
async def test_substring_match_prefers_newest(test_db_session):
    now = datetime.utcnow()
    await EmissionCategoryFactory(name="Fuel", created_at=now - timedelta(days=1))
    newest = await EmissionCategoryFactory(name="Fuel Oil", created_at=now)

    category = await CategoryMatcher(test_db_session).match("fuel")

    assert category.id == newest.id


@pytest.mark.asyncio
async def test_underscored_name_matches_spaced_category(test_db_session):
    gas = await EmissionCategoryFactory(name="Natural Gas", scope=Scope.SCOPE_1)

    category = await CategoryMatcher(test_db_session).match("natural_gas")

    assert category.id == gas.id


@pytest.mark.asyncio
async def test_fuzzy_fallback_handles_typos(test_db_session):
    electricity = await EmissionCategoryFactory(name="Electricity")

    result = await CategoryMatcher(test_db_session).fuzzy_match("electricty")

    assert result is not None
    category, confidence = result
    assert category.id == electricity.id
    assert confidence >= 0.8


@pytest.mark.asyncio
async def test_no_match_returns_none(test_db_session):
    await EmissionCategoryFactory(name="Electricity")

    assert await CategoryMatcher(test_db_session).match("diesel") is None


@pytest.mark.asyncio
async def test_no_categories_returns_none(test_db_session):
    assert await CategoryMatcher(test_db_session).match("water") is None
