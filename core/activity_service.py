"""Activity usecases.

Creation and update are gated before any repository call and keep the product
stock in line with the activity ledger. Read helpers cover filtering,
pagination and the sales/profit totals shown on the dashboard.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Sequence

from core.date_utils import filter_by_date_range, is_valid_iso8601
from core.errors import ActivityNotFoundError, DomainValidationError, ProductNotFoundError
from core.number_utils import validate_number
from core.repositories.activities import Activity, ActivityRepository, ActivityType
from core.repositories.base import PagedResult
from core.repositories.products import ProductRepository
from core.validation import is_valid_activity, is_valid_activity_type

logger = logging.getLogger(__name__)

_PRODUCT_ID_REQUIRED = {ActivityType.SALE, ActivityType.STOCK_CORRECTION}
_STOCK_FIELDS = ("quantity", "product_id", "type")
_PATCHABLE_FIELDS = ("date", "type", "quantity", "amount", "product_id", "note")
DEFAULT_PAGE_SIZE = 20
DEFAULT_RECENT_LIMIT = 10


def _type_label(value: Any) -> str:
    return str(getattr(value, "value", value))


def _requires_product(activity_type: Any) -> bool:
    return activity_type in _PRODUCT_ID_REQUIRED


def _is_blank(product_id: str | None) -> bool:
    return not product_id or not product_id.strip()


def validate_date_bounds(start_date: str | None, end_date: str | None) -> None:
    """Raise ``DomainValidationError`` for a malformed optional window bound."""

    if start_date is not None and not is_valid_iso8601(start_date):
        raise DomainValidationError("startDate must be a valid ISO 8601 string")
    if end_date is not None and not is_valid_iso8601(end_date):
        raise DomainValidationError("endDate must be a valid ISO 8601 string")


async def _apply_stock_delta(product_repo: ProductRepository, product_id: str, delta: float) -> None:
    product = await product_repo.get_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(f"Product with id {product_id} not found")
    expected = product.stock + delta
    if expected < 0:
        logger.warning(
            "Stock would go negative for product %s: current %s, delta %s, expected %s. Clamping to 0.",
            product_id,
            product.stock,
            delta,
            expected,
        )
    await product_repo.update_stock(product_id, delta)


async def _update_stock_from_activity(product_repo: ProductRepository, activity: Activity) -> None:
    if not activity.product_id or activity.type == ActivityType.OTHER or activity.quantity == 0:
        return
    await _apply_stock_delta(product_repo, activity.product_id, activity.quantity)


async def add_activity(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    activity: Activity,
) -> Activity:
    """Validate, persist and book the stock effect of a new activity.

    When the stock update fails the created activity is deleted again and the
    stock error is re-raised unchanged.
    """

    if _requires_product(activity.type) and _is_blank(activity.product_id):
        raise DomainValidationError(
            f"productId is required for {_type_label(activity.type)} activity type"
        )
    if not activity.date or not is_valid_iso8601(activity.date):
        raise DomainValidationError("date must be a valid ISO 8601 string")
    validate_number(activity.quantity, "quantity")
    validate_number(activity.amount, "amount")
    if not is_valid_activity(activity):
        raise DomainValidationError("Activity validation failed")

    created = await activity_repo.create(activity)
    try:
        await _update_stock_from_activity(product_repo, created)
    except Exception:
        try:
            await activity_repo.delete(created.id)
        except Exception:
            logger.exception(
                "Rollback of activity %s failed; it may remain stored without its stock effect",
                created.id,
            )
        raise

    logger.info("Activity %s (%s) recorded", created.id, _type_label(created.type))
    return created


async def list_activities(repo: ActivityRepository) -> Sequence[Activity]:
    return await repo.list_all()


async def update_activity(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    id: str,
    changes: Mapping[str, Any],
) -> Activity:
    """Apply a partial patch to an activity and recompute the affected stock."""

    existing = await activity_repo.get_by_id(id)
    if existing is None:
        raise ActivityNotFoundError(f"Activity with id {id} not found")

    changes = {key: value for key, value in changes.items() if key in _PATCHABLE_FIELDS}
    if "type" in changes:
        if not is_valid_activity_type(changes["type"]):
            raise DomainValidationError(f"Invalid activity type: {changes['type']}")
        changes["type"] = ActivityType(changes["type"])

    if "product_id" in changes and _is_blank(changes["product_id"]) and _requires_product(existing.type):
        raise DomainValidationError(
            f"Cannot remove productId from {_type_label(existing.type)} activity type"
        )

    merged = replace(existing, **changes)
    if _requires_product(merged.type) and _is_blank(merged.product_id):
        raise DomainValidationError(
            f"productId is required for {_type_label(merged.type)} activity type"
        )
    if "date" in changes and (not changes["date"] or not is_valid_iso8601(changes["date"])):
        raise DomainValidationError("date must be a valid ISO 8601 string")
    if "quantity" in changes:
        validate_number(changes["quantity"], "quantity")
    if "amount" in changes:
        validate_number(changes["amount"], "amount")
    if not is_valid_activity(merged):
        raise DomainValidationError("Activity validation failed")

    affects_stock = any(
        field in changes and changes[field] != getattr(existing, field) for field in _STOCK_FIELDS
    )
    updated = await activity_repo.update(id, changes)
    if not affects_stock:
        return updated

    try:
        product_ids = [pid for pid in (existing.product_id, updated.product_id) if pid]
        for product_id in dict.fromkeys(product_ids):
            stock_map = await compute_stock_from_activities(activity_repo, product_id)
            recomputed = stock_map.get(product_id, 0.0)
            product = await product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product with id {product_id} not found")
            delta = recomputed - product.stock
            if recomputed < 0:
                logger.warning(
                    "Recomputed stock for product %s is negative (%s). Clamping to 0.",
                    product_id,
                    recomputed,
                )
            if delta != 0:
                await product_repo.update_stock(product_id, delta)
    except Exception:
        revert = {field: getattr(existing, field) for field in changes}
        try:
            await activity_repo.update(id, revert)
        except Exception:
            logger.exception(
                "Rollback of activity %s update failed; stock may not match the activity",
                id,
            )
        raise

    return updated


async def compute_stock_from_activities(
    repo: ActivityRepository, product_id: str | None = None
) -> dict[str, float]:
    """Sum activity quantities per product, optionally for a single product."""

    stock: dict[str, float] = {}
    for activity in await repo.list_all():
        if not activity.product_id:
            continue
        if product_id is not None and activity.product_id != product_id:
            continue
        stock[activity.product_id] = stock.get(activity.product_id, 0.0) + activity.quantity
    return stock


async def compute_total_sales(
    repo: ActivityRepository,
    start_date: str | None = None,
    end_date: str | None = None,
) -> float:
    validate_date_bounds(start_date, end_date)
    activities = filter_by_date_range(await repo.list_all(), start_date, end_date)
    return sum((a.amount for a in activities if a.type == ActivityType.SALE), 0.0)


async def compute_profit(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    start_date: str | None = None,
    end_date: str | None = None,
) -> float:
    """Profit of the sales in the window: (sale price - unit cost) x |quantity|.

    Sales without a product, or pointing at an unknown product, are ignored.
    """

    validate_date_bounds(start_date, end_date)
    activities = filter_by_date_range(await activity_repo.list_all(), start_date, end_date)
    sales = [a for a in activities if a.type == ActivityType.SALE]
    if not sales:
        return 0.0

    products = {p.id: p for p in await product_repo.list_all()}
    profit = 0.0
    for sale in sales:
        product = products.get(sale.product_id) if sale.product_id else None
        if product is None:
            continue
        profit += (product.sale_price - product.unit_cost) * abs(sale.quantity)
    return profit


async def list_activities_with_filters(
    repo: ActivityRepository,
    start_date: str | None = None,
    end_date: str | None = None,
    type: ActivityType | None = None,
    product_id: str | None = None,
) -> list[Activity]:
    validate_date_bounds(start_date, end_date)
    activities = filter_by_date_range(await repo.list_all(), start_date, end_date)
    if type is not None:
        activities = [a for a in activities if a.type == type]
    if product_id is not None:
        activities = [a for a in activities if a.product_id == product_id]
    return activities


def _newest_first(activities: Sequence[Activity]) -> list[Activity]:
    return sorted(activities, key=lambda activity: activity.date, reverse=True)


async def list_activities_paginated(
    repo: ActivityRepository,
    start_date: str | None = None,
    end_date: str | None = None,
    type: ActivityType | None = None,
    product_id: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PagedResult[Activity]:
    """Filtered activities, newest first, one page at a time.

    ``page`` and ``page_size`` are floored and clamped to at least 1; a page past
    the end yields no items but keeps the totals.
    """

    page = max(1, int(page))
    page_size = max(1, int(page_size))
    activities = _newest_first(
        await list_activities_with_filters(repo, start_date, end_date, type, product_id)
    )
    start = (page - 1) * page_size
    return PagedResult(
        items=activities[start : start + page_size],
        total=len(activities),
        page=page,
        per_page=page_size,
    )


async def list_recent_activities(
    repo: ActivityRepository, limit: int = DEFAULT_RECENT_LIMIT
) -> list[Activity]:
    return _newest_first(await repo.list_all())[: max(0, limit)]


__all__ = [
    "validate_date_bounds",
    "add_activity",
    "list_activities",
    "update_activity",
    "compute_stock_from_activities",
    "compute_total_sales",
    "compute_profit",
    "list_activities_with_filters",
    "list_activities_paginated",
    "list_recent_activities",
]
