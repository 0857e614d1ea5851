"""FastAPI dependencies resolving the SQL repositories used by the routers.

Tests swap them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from core.repositories import (
    SqlActivityRepository,
    SqlCostRepository,
    SqlProductRepository,
    SqlStockMovementRepository,
)
from core.repositories.activities import ActivityRepository
from core.repositories.costs import CostRepository
from core.repositories.products import ProductRepository
from core.repositories.stock_movements import StockMovementRepository


@lru_cache
def get_product_repository() -> ProductRepository:
    return SqlProductRepository()


@lru_cache
def get_activity_repository() -> ActivityRepository:
    return SqlActivityRepository()


@lru_cache
def get_stock_movement_repository() -> StockMovementRepository:
    return SqlStockMovementRepository()


@lru_cache
def get_cost_repository() -> CostRepository:
    return SqlCostRepository()


__all__ = [
    "get_product_repository",
    "get_activity_repository",
    "get_stock_movement_repository",
    "get_cost_repository",
]
