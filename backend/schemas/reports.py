"""Schemas for the revenue report endpoint."""

from __future__ import annotations

from pydantic import BaseModel

from core.revenue_service import RevenuePeriod


class RevenueReportResponse(BaseModel):
    model_config = dict(from_attributes=True)

    period: RevenuePeriod
    start_date: str
    end_date: str
    total_revenue: float
    material_costs: float
    gross_margin: float
    gross_margin_rate: float


__all__ = ["RevenueReportResponse"]
