"""Schemas for statistics endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class PeriodStatisticsOut(BaseModel):
    model_config = dict(from_attributes=True)

    period: str
    profit: float
    total_sales: float
    total_creations: int


class ProductMarginOut(BaseModel):
    model_config = dict(from_attributes=True)

    product_id: str
    sales_count: int
    total_revenue: float
    total_cost: float
    profit: float
    margin_percentage: float


class BusinessStatisticsResponse(BaseModel):
    model_config = dict(from_attributes=True)

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    total_profit: float
    total_sales: float
    total_creations: int
    product_margins: List[ProductMarginOut]


class TotalResponse(BaseModel):
    value: float


__all__ = [
    "PeriodStatisticsOut",
    "ProductMarginOut",
    "BusinessStatisticsResponse",
    "TotalResponse",
]
