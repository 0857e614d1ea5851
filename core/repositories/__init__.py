"""
Repository Layer - Clean Architecture pattern for data access.

This module provides:
- Entity dataclasses and closed enums of the tracker
- Async repository protocols consumed by the usecases
- Concrete SQL implementations using SQLAlchemy
"""

from .base import (
    PagedResult,
    Repository,
    ReadOnlyRepository,
)
from .activities import Activity, ActivityRepository, ActivityType, SqlActivityRepository
from .costs import CostRepository, MonthlyCost, SqlCostRepository
from .products import (
    LegacyNaming,
    NormalizedNaming,
    Product,
    ProductColoris,
    ProductModel,
    ProductNaming,
    ProductRepository,
    ProductType,
    SqlProductRepository,
)
from .stock_movements import (
    SqlStockMovementRepository,
    StockMovement,
    StockMovementRepository,
    StockMovementSource,
)

__all__ = [
    # Base
    "PagedResult",
    "Repository",
    "ReadOnlyRepository",
    # Products
    "LegacyNaming",
    "NormalizedNaming",
    "Product",
    "ProductColoris",
    "ProductModel",
    "ProductNaming",
    "ProductRepository",
    "ProductType",
    "SqlProductRepository",
    # Activities
    "Activity",
    "ActivityRepository",
    "ActivityType",
    "SqlActivityRepository",
    # Stock
    "StockMovement",
    "StockMovementRepository",
    "StockMovementSource",
    "SqlStockMovementRepository",
    # Costs
    "CostRepository",
    "MonthlyCost",
    "SqlCostRepository",
]
