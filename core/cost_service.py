"""Monthly fixed costs (shipping, marketing, overhead)."""

from __future__ import annotations

from typing import Any

from core.date_utils import is_valid_month
from core.errors import DomainValidationError
from core.number_utils import is_valid_number
from core.repositories.costs import COST_FIELD_COLUMNS, CostRepository, MonthlyCost


def _check_month(month: Any) -> None:
    if not is_valid_month(month):
        raise DomainValidationError(
            f'Invalid month format: {month}. Expected YYYY-MM format (e.g., "2025-01")'
        )


def _is_valid_cost(value: Any) -> bool:
    return is_valid_number(value) and value >= 0


async def get_monthly_cost(repo: CostRepository, month: str) -> MonthlyCost | None:
    _check_month(month)
    return await repo.get_monthly_cost(month)


async def create_or_update_monthly_cost(repo: CostRepository, cost: MonthlyCost) -> MonthlyCost:
    """Upsert the costs of ``cost.month``; every amount must be finite and >= 0."""

    _check_month(cost.month)
    amounts = (cost.shipping_cost, cost.marketing_cost, cost.overhead_cost)
    if not all(_is_valid_cost(amount) for amount in amounts):
        raise DomainValidationError(
            "Invalid cost values: all costs must be non-negative numbers. "
            f"shippingCost: {cost.shipping_cost}, "
            f"marketingCost: {cost.marketing_cost}, "
            f"overheadCost: {cost.overhead_cost}"
        )
    return await repo.create_or_update_monthly_cost(cost)


async def update_monthly_cost_field(
    repo: CostRepository, month: str, field: str, value: float
) -> MonthlyCost:
    _check_month(month)
    if field not in COST_FIELD_COLUMNS:
        raise DomainValidationError(
            f'Invalid field name: {field}. Must be one of: "shipping", "marketing", "overhead"'
        )
    if not _is_valid_cost(value):
        raise DomainValidationError(
            f"Invalid value: {value}. Must be a non-negative finite number (>= 0)"
        )
    return await repo.update_monthly_cost_field(month, field, value)


__all__ = ["get_monthly_cost", "create_or_update_monthly_cost", "update_monthly_cost_field"]
