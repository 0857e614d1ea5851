"""
Stock Movement Repository - Data access for stock_movements table.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol, Sequence

from sqlalchemy import text

from core.data_repository import as_records, query_df

from .base import ReadOnlyRepository, SqlRepositoryBase


class StockMovementSource(str, Enum):
    CREATION = "CREATION"
    SALE = "SALE"
    INVENTORY_ADJUSTMENT = "INVENTORY_ADJUSTMENT"


@dataclass(frozen=True)
class StockMovement:
    """Stock movement entity (signed quantity, positive means stock in)."""

    id: str | None
    product_id: str
    quantity: float
    source: StockMovementSource


class StockMovementRepository(ReadOnlyRepository[StockMovement], Protocol):
    """Stock movement repository interface (append-only)."""

    async def list_by_product(self, product_id: str) -> Sequence[StockMovement]:
        ...

    async def create(self, movement: StockMovement) -> StockMovement:
        ...


class SqlStockMovementRepository(SqlRepositoryBase):
    """SQLAlchemy implementation of StockMovementRepository."""

    async def list_all(self) -> Sequence[StockMovement]:
        sql = text(
            """
            SELECT id, product_id, quantity, source
            FROM stock_movements
            ORDER BY created_at DESC, id ASC
            """
        )
        df = await query_df(sql, engine=self._engine)
        return [self._row_to_movement(row) for row in as_records(df)]

    async def get_by_id(self, id: str) -> StockMovement | None:
        sql = text(
            """
            SELECT id, product_id, quantity, source
            FROM stock_movements
            WHERE id = :id
            """
        )
        records = as_records(await query_df(sql, {"id": id}, engine=self._engine))
        if not records:
            return None
        return self._row_to_movement(records[0])

    async def list_by_product(self, product_id: str) -> Sequence[StockMovement]:
        sql = text(
            """
            SELECT id, product_id, quantity, source
            FROM stock_movements
            WHERE product_id = :product_id
            ORDER BY created_at DESC, id ASC
            """
        )
        df = await query_df(sql, {"product_id": product_id}, engine=self._engine)
        return [self._row_to_movement(row) for row in as_records(df)]

    async def create(self, movement: StockMovement) -> StockMovement:
        sql = text(
            """
            INSERT INTO stock_movements (id, product_id, quantity, source)
            VALUES (:id, :product_id, :quantity, :source)
            """
        )
        created = replace(movement, id=str(uuid.uuid4()))
        params = {
            "id": created.id,
            "product_id": created.product_id,
            "quantity": float(created.quantity),
            "source": StockMovementSource(created.source).value,
        }
        async with self._engine.begin() as conn:
            await conn.execute(sql, params)
        return created

    def _row_to_movement(self, row: dict) -> StockMovement:
        return StockMovement(
            id=str(row["id"]),
            product_id=str(row["product_id"]),
            quantity=float(row["quantity"]),
            source=StockMovementSource(row["source"]),
        )
