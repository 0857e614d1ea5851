"""
Activity Repository - Data access for activities table.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

from sqlalchemy import text

from core.data_repository import as_records, exec_sql, query_df
from core.errors import ActivityNotFoundError

from .base import Repository, SqlRepositoryBase


class ActivityType(str, Enum):
    CREATION = "CREATION"
    SALE = "SALE"
    STOCK_CORRECTION = "STOCK_CORRECTION"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Activity:
    """Business event (creation, sale, stock correction, other).

    ``date`` is kept as the ISO-8601 string the caller supplied; ``quantity`` is
    signed (sales are usually negative), ``amount`` is the currency value.
    """

    id: str | None
    date: str
    type: ActivityType
    quantity: float
    amount: float
    product_id: str | None = None
    note: str | None = None


class ActivityRepository(Repository[Activity], Protocol):
    """Activity repository interface."""

    async def delete(self, id: str) -> None:
        ...


_UPDATABLE_FIELDS = {"date", "type", "quantity", "amount", "product_id", "note"}


class SqlActivityRepository(SqlRepositoryBase):
    """SQLAlchemy implementation of ActivityRepository."""

    async def list_all(self) -> Sequence[Activity]:
        sql = text(
            """
            SELECT id, date, type, quantity, amount, product_id, note
            FROM activities
            ORDER BY date DESC, id ASC
            """
        )
        df = await query_df(sql, engine=self._engine)
        return [self._row_to_activity(row) for row in as_records(df)]

    async def get_by_id(self, id: str) -> Activity | None:
        sql = text(
            """
            SELECT id, date, type, quantity, amount, product_id, note
            FROM activities
            WHERE id = :id
            """
        )
        records = as_records(await query_df(sql, {"id": id}, engine=self._engine))
        if not records:
            return None
        return self._row_to_activity(records[0])

    async def create(self, activity: Activity) -> Activity:
        sql = text(
            """
            INSERT INTO activities (id, date, type, quantity, amount, product_id, note)
            VALUES (:id, :date, :type, :quantity, :amount, :product_id, :note)
            """
        )
        created = replace(activity, id=str(uuid.uuid4()))
        params = {
            "id": created.id,
            "date": created.date,
            "type": ActivityType(created.type).value,
            "quantity": float(created.quantity),
            "amount": float(created.amount),
            "product_id": created.product_id,
            "note": created.note,
        }
        async with self._engine.begin() as conn:
            await conn.execute(sql, params)
        return created

    async def update(self, id: str, changes: Mapping[str, Any]) -> Activity:
        fields = {key: value for key, value in changes.items() if key in _UPDATABLE_FIELDS}
        if fields:
            assignments = ", ".join(f"{key} = :{key}" for key in sorted(fields))
            params: dict[str, Any] = {
                key: value.value if isinstance(value, Enum) else value
                for key, value in fields.items()
            }
            params["id"] = id
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    text(f"UPDATE activities SET {assignments} WHERE id = :id"),
                    params,
                )
                if result.rowcount == 0:
                    raise ActivityNotFoundError(f"Activity with id {id} not found")
        updated = await self.get_by_id(id)
        if updated is None:
            raise ActivityNotFoundError(f"Activity with id {id} not found")
        return updated

    async def delete(self, id: str) -> None:
        await exec_sql(text("DELETE FROM activities WHERE id = :id"), {"id": id}, engine=self._engine)

    def _row_to_activity(self, row: dict) -> Activity:
        product_id = row.get("product_id")
        return Activity(
            id=str(row["id"]),
            date=str(row["date"]),
            type=ActivityType(row["type"]),
            quantity=float(row["quantity"]),
            amount=float(row["amount"]),
            product_id=str(product_id) if product_id else None,
            note=row.get("note"),
        )
