"""Schemas for monthly cost endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class MonthlyCostOut(BaseModel):
    model_config = dict(from_attributes=True)

    id: str
    month: str
    shipping_cost: float
    marketing_cost: float
    overhead_cost: float


class MonthlyCostUpsertRequest(BaseModel):
    shipping_cost: float = 0
    marketing_cost: float = 0
    overhead_cost: float = 0


class MonthlyCostFieldRequest(BaseModel):
    field: Literal["shipping", "marketing", "overhead"]
    value: float


__all__ = ["MonthlyCostOut", "MonthlyCostUpsertRequest", "MonthlyCostFieldRequest"]
