"""Stock movement endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from backend.dependencies.repositories import get_stock_movement_repository
from backend.schemas.stock import (
    StockMovementCreateRequest,
    StockMovementListResponse,
    StockMovementOut,
)
from core import stock_movement_service
from core.repositories.stock_movements import StockMovement, StockMovementRepository

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get("/movements", response_model=StockMovementListResponse)
async def list_movements(repo: StockMovementRepository = Depends(get_stock_movement_repository)):
    movements = await stock_movement_service.list_stock_movements(repo)
    return StockMovementListResponse(items=[StockMovementOut.model_validate(m) for m in movements])


@router.get("/movements/product/{product_id}", response_model=StockMovementListResponse)
async def list_movements_by_product(
    product_id: str,
    repo: StockMovementRepository = Depends(get_stock_movement_repository),
):
    movements = await stock_movement_service.list_stock_movements_by_product(repo, product_id)
    return StockMovementListResponse(items=[StockMovementOut.model_validate(m) for m in movements])


@router.post("/movements", response_model=StockMovementOut, status_code=status.HTTP_201_CREATED)
async def create_movement(
    payload: StockMovementCreateRequest,
    repo: StockMovementRepository = Depends(get_stock_movement_repository),
):
    created = await stock_movement_service.create_stock_movement(
        repo, StockMovement(id=None, **payload.model_dump())
    )
    return StockMovementOut.model_validate(created)
