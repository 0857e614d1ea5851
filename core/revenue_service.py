"""Revenue engine: turns the sales of a date window into a margin report."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from core.date_utils import filter_by_date_range, is_valid_iso8601
from core.errors import DomainValidationError
from core.repositories.activities import ActivityRepository, ActivityType
from core.repositories.products import ProductRepository

logger = logging.getLogger(__name__)


class RevenuePeriod(str, Enum):
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True)
class RevenueReport:
    """Derived report, never persisted. Dates and period echo the request."""

    period: RevenuePeriod
    start_date: str
    end_date: str
    total_revenue: float
    material_costs: float
    gross_margin: float
    gross_margin_rate: float

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["period"] = RevenuePeriod(self.period).value
        return payload


async def compute_revenue(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    period: RevenuePeriod,
    start_date: str,
    end_date: str,
) -> RevenueReport:
    """Aggregate SALE activities dated within [start_date, end_date].

    Material cost uses each product's current unit cost times the absolute sold
    quantity. A sale without product, or with an unknown product, still counts as
    revenue but adds no cost. Repository errors propagate unchanged.
    """

    if not is_valid_iso8601(start_date):
        raise DomainValidationError("startDate must be a valid ISO 8601 string")
    if not is_valid_iso8601(end_date):
        raise DomainValidationError("endDate must be a valid ISO 8601 string")

    activities, products = await asyncio.gather(
        activity_repo.list_all(),
        product_repo.list_all(),
    )

    sales = [
        activity
        for activity in filter_by_date_range(activities, start_date, end_date)
        if activity.type == ActivityType.SALE
    ]
    unit_costs = {product.id: product.unit_cost for product in products}

    total_revenue = 0.0
    material_costs = 0.0
    for sale in sales:
        total_revenue += sale.amount
        if not sale.product_id:
            continue
        unit_cost = unit_costs.get(sale.product_id)
        if unit_cost is None:
            logger.debug("Sale %s references unknown product %s", sale.id, sale.product_id)
            continue
        material_costs += unit_cost * abs(sale.quantity)

    gross_margin = total_revenue - material_costs
    gross_margin_rate = 0.0 if total_revenue == 0 else gross_margin / total_revenue * 100

    return RevenueReport(
        period=period,
        start_date=start_date,
        end_date=end_date,
        total_revenue=total_revenue,
        material_costs=material_costs,
        gross_margin=gross_margin,
        gross_margin_rate=gross_margin_rate,
    )


__all__ = ["RevenuePeriod", "RevenueReport", "compute_revenue"]
