"""Schemas for stock movement endpoints."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from core.repositories.stock_movements import StockMovementSource


class StockMovementOut(BaseModel):
    model_config = dict(from_attributes=True)

    id: str
    product_id: str
    quantity: float
    source: StockMovementSource


class StockMovementCreateRequest(BaseModel):
    product_id: str
    quantity: float
    source: str


class StockMovementListResponse(BaseModel):
    items: List[StockMovementOut]


__all__ = [
    "StockMovementOut",
    "StockMovementCreateRequest",
    "StockMovementListResponse",
]
