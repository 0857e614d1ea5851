"""Monthly cost endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from backend.dependencies.repositories import get_cost_repository
from backend.schemas.costs import MonthlyCostFieldRequest, MonthlyCostOut, MonthlyCostUpsertRequest
from core import cost_service
from core.repositories.costs import CostRepository, MonthlyCost

router = APIRouter(prefix="/costs", tags=["costs"])


@router.get("/{month}", response_model=MonthlyCostOut)
async def get_monthly_cost(month: str, repo: CostRepository = Depends(get_cost_repository)):
    cost = await cost_service.get_monthly_cost(repo, month)
    if cost is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No costs recorded for {month}")
    return MonthlyCostOut.model_validate(cost)


@router.put("/{month}", response_model=MonthlyCostOut)
async def upsert_monthly_cost(
    month: str,
    payload: MonthlyCostUpsertRequest,
    repo: CostRepository = Depends(get_cost_repository),
):
    cost = await cost_service.create_or_update_monthly_cost(
        repo, MonthlyCost(id=None, month=month, **payload.model_dump())
    )
    return MonthlyCostOut.model_validate(cost)


@router.patch("/{month}", response_model=MonthlyCostOut)
async def update_monthly_cost_field(
    month: str,
    payload: MonthlyCostFieldRequest,
    repo: CostRepository = Depends(get_cost_repository),
):
    cost = await cost_service.update_monthly_cost_field(repo, month, payload.field, payload.value)
    return MonthlyCostOut.model_validate(cost)
