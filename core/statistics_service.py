"""Statistiques d'activité : bénéfices par période, marges par produit, synthèse."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

import pandas as pd

from core.activity_service import validate_date_bounds
from core.date_utils import filter_by_date_range, parse_iso8601
from core.repositories.activities import Activity, ActivityRepository, ActivityType
from core.repositories.products import Product, ProductRepository

logger = logging.getLogger(__name__)


class StatisticsPeriod(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


_PERIOD_FORMATS = {
    StatisticsPeriod.DAILY: "%Y-%m-%d",
    StatisticsPeriod.MONTHLY: "%Y-%m",
    StatisticsPeriod.YEARLY: "%Y",
}

_SALE_COLUMNS = ["product_id", "date", "amount", "quantity_sold", "unit_cost", "sale_price"]


@dataclass(frozen=True)
class PeriodStatistics:
    period: str
    profit: float
    total_sales: float
    total_creations: int


@dataclass(frozen=True)
class ProductMargin:
    product_id: str
    sales_count: int
    total_revenue: float
    total_cost: float
    profit: float
    margin_percentage: float


@dataclass(frozen=True)
class BusinessStatistics:
    start_date: str | None
    end_date: str | None
    total_profit: float
    total_sales: float
    total_creations: int
    product_margins: list[ProductMargin] = field(default_factory=list)


def _period_key(date: str, period: StatisticsPeriod) -> str | None:
    try:
        return parse_iso8601(date).strftime(_PERIOD_FORMATS[StatisticsPeriod(period)])
    except (TypeError, ValueError):
        logger.warning("Ignoring activity with unparseable date %r", date)
        return None


def _sales_frame(activities: Iterable[Activity], products: Sequence[Product]) -> pd.DataFrame:
    """Une ligne par vente rattachée à un produit connu."""

    by_id = {product.id: product for product in products}
    rows = []
    for activity in activities:
        if activity.type != ActivityType.SALE or not activity.product_id:
            continue
        product = by_id.get(activity.product_id)
        if product is None:
            continue
        rows.append(
            {
                "product_id": activity.product_id,
                "date": activity.date,
                "amount": float(activity.amount),
                "quantity_sold": abs(float(activity.quantity)),
                "unit_cost": float(product.unit_cost),
                "sale_price": float(product.sale_price),
            }
        )
    frame = pd.DataFrame(rows, columns=_SALE_COLUMNS)
    frame["profit"] = (frame["sale_price"] - frame["unit_cost"]) * frame["quantity_sold"]
    frame["cost"] = frame["unit_cost"] * frame["quantity_sold"]
    return frame


def _product_margins(frame: pd.DataFrame) -> list[ProductMargin]:
    if frame.empty:
        return []
    grouped = frame.groupby("product_id", sort=False).agg(
        sales_count=("amount", "size"),
        total_revenue=("amount", "sum"),
        total_cost=("cost", "sum"),
    )
    margins = []
    for product_id, row in grouped.iterrows():
        revenue = float(row["total_revenue"])
        cost = float(row["total_cost"])
        profit = revenue - cost
        margins.append(
            ProductMargin(
                product_id=str(product_id),
                sales_count=int(row["sales_count"]),
                total_revenue=revenue,
                total_cost=cost,
                profit=profit,
                margin_percentage=profit / revenue * 100 if revenue > 0 else 0.0,
            )
        )
    margins.sort(key=lambda margin: margin.profit, reverse=True)
    return margins


async def _window(
    activity_repo: ActivityRepository, start_date: str | None, end_date: str | None
) -> list[Activity]:
    validate_date_bounds(start_date, end_date)
    return filter_by_date_range(await activity_repo.list_all(), start_date, end_date)


async def compute_profits_by_period(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    period: StatisticsPeriod,
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[PeriodStatistics]:
    """Bénéfice, ventes et créations agrégés par jour, mois ou année (clés UTC, triées).

    Une fenêtre sans aucune vente renvoie une liste vide, même si elle contient des créations.
    """

    activities = await _window(activity_repo, start_date, end_date)
    if not any(activity.type == ActivityType.SALE for activity in activities):
        return []

    frame = _sales_frame(activities, await product_repo.list_all())
    frame["period"] = [_period_key(date, period) for date in frame["date"]]
    frame = frame.dropna(subset=["period"])
    sales = frame.groupby("period").agg(profit=("profit", "sum"), total_sales=("amount", "sum"))

    creation_keys = [
        _period_key(activity.date, period)
        for activity in activities
        if activity.type == ActivityType.CREATION
    ]
    creations = pd.Series([key for key in creation_keys if key is not None], dtype="object").value_counts()

    keys = sorted(set(sales.index) | set(creations.index))
    return [
        PeriodStatistics(
            period=str(key),
            profit=float(sales["profit"].get(key, 0.0)),
            total_sales=float(sales["total_sales"].get(key, 0.0)),
            total_creations=int(creations.get(key, 0)),
        )
        for key in keys
    ]


async def compute_total_creations(
    activity_repo: ActivityRepository,
    start_date: str | None = None,
    end_date: str | None = None,
) -> int:
    activities = await _window(activity_repo, start_date, end_date)
    return sum(1 for activity in activities if activity.type == ActivityType.CREATION)


async def compute_product_margins(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[ProductMargin]:
    """Marges par produit, triées par bénéfice décroissant."""

    activities = await _window(activity_repo, start_date, end_date)
    if not any(activity.type == ActivityType.SALE for activity in activities):
        return []
    return _product_margins(_sales_frame(activities, await product_repo.list_all()))


async def compute_business_statistics(
    activity_repo: ActivityRepository,
    product_repo: ProductRepository,
    start_date: str | None = None,
    end_date: str | None = None,
) -> BusinessStatistics:
    activities = await _window(activity_repo, start_date, end_date)
    frame = _sales_frame(activities, await product_repo.list_all())
    return BusinessStatistics(
        start_date=start_date,
        end_date=end_date,
        total_profit=float(frame["profit"].sum()),
        total_sales=float(frame["amount"].sum()),
        total_creations=sum(1 for activity in activities if activity.type == ActivityType.CREATION),
        product_margins=_product_margins(frame),
    )


__all__ = [
    "StatisticsPeriod",
    "PeriodStatistics",
    "ProductMargin",
    "BusinessStatistics",
    "compute_profits_by_period",
    "compute_total_creations",
    "compute_product_margins",
    "compute_business_statistics",
]
