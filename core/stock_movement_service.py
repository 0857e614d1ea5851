"""Stock movement usecases: gate the input, then delegate to the repository."""

from __future__ import annotations

import logging
from typing import Sequence

from core.errors import DomainValidationError
from core.number_utils import validate_number
from core.repositories.stock_movements import StockMovement, StockMovementRepository
from core.validation import is_valid_stock_movement, is_valid_stock_movement_source

logger = logging.getLogger(__name__)


async def list_stock_movements(repo: StockMovementRepository) -> Sequence[StockMovement]:
    return await repo.list_all()


async def list_stock_movements_by_product(
    repo: StockMovementRepository, product_id: str
) -> Sequence[StockMovement]:
    return await repo.list_by_product(product_id)


async def create_stock_movement(
    repo: StockMovementRepository, movement: StockMovement
) -> StockMovement:
    """Validate a movement and persist it.

    Checks run in a fixed order (product, quantity, source, sign rule) and the
    first failure raises ``DomainValidationError`` without touching storage.
    Repository errors propagate unchanged.
    """

    if not movement.product_id:
        raise DomainValidationError("productId is required for stock movement")

    validate_number(movement.quantity, "quantity")
    if movement.quantity == 0:
        raise DomainValidationError("quantity must be non-zero")

    if not is_valid_stock_movement_source(movement.source):
        raise DomainValidationError(f"Invalid source value: {movement.source}")

    if not is_valid_stock_movement(movement):
        raise DomainValidationError("Stock movement validation failed")

    created = await repo.create(movement)
    logger.info(
        "Stock movement %s recorded for product %s (%s %+g)",
        created.id,
        created.product_id,
        getattr(created.source, "value", created.source),
        created.quantity,
    )
    return created


__all__ = [
    "list_stock_movements",
    "list_stock_movements_by_product",
    "create_stock_movement",
]
