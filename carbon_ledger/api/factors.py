"""
Emission reference data API router.

Read-only operations for emission categories and factors.
"""
import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import get_db_session
from carbon_ledger.database.repositories import (
    EmissionCategoryRepository,
    EmissionFactorRepository,
)
from carbon_ledger.pydantic_models.emission_factor import (
    EmissionCategoryPydModel,
    EmissionFactorPydModel,
    FactorResolutionPydModel,
)
from carbon_ledger.services.calculators.factor_resolver import FactorResolver

router = APIRouter(
    prefix="/api/v1/factors",
    tags=["Emission Factors"],
)

logger = logging.getLogger(__name__)


@router.get("/", response_model=list[EmissionFactorPydModel])
async def list_emission_factors(
    skip: int = 0,
    limit: int = 100,
    category_id: UUID | None = None,
    session: AsyncSession = Depends(get_db_session),
):
    """
    List emission factors with pagination and optional filtering.

    Args:
        skip: Number of records to skip
        limit: Maximum number of records to return
        category_id: Filter by emission category (optional)
    """
    repo = EmissionFactorRepository(session)

    if category_id:
        factors = await repo.get_by_category(category_id, skip=skip, limit=limit)
    else:
        factors = await repo.get_all(skip=skip, limit=limit)

    return factors


@router.get("/categories", response_model=list[EmissionCategoryPydModel])
async def list_emission_categories(
    session: AsyncSession = Depends(get_db_session),
):
    """List emission categories ordered by scope and name."""
    repo = EmissionCategoryRepository(session)
    return await repo.list_all()


@router.get("/resolve", response_model=FactorResolutionPydModel)
async def resolve_emission_factor(
    category_id: UUID,
    unit: str,
    as_of: date | None = None,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Show which factor applies to a category and unit on a date.

    ``factor`` is null when no active factor matches; that is not an error.
    """
    as_of = as_of or date.today()
    factor = await FactorResolver(session).resolve(category_id, unit, as_of)
    return FactorResolutionPydModel(
        category_id=category_id,
        unit=unit,
        as_of=as_of,
        factor=EmissionFactorPydModel.model_validate(factor) if factor else None,
    )


@router.get("/{factor_id}", response_model=EmissionFactorPydModel)
async def get_emission_factor(
    factor_id: UUID,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Get emission factor by ID.
    """
    repo = EmissionFactorRepository(session)
    factor = await repo.get_by_id(factor_id)

    if not factor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Emission factor {factor_id} not found",
        )

    return factor
