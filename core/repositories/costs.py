"""
Cost Repository - Data access for monthly_costs table.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Literal, Protocol

from sqlalchemy import text

from core.data_repository import as_records, exec_sql, query_df
from core.errors import MonthlyCostNotFoundError

from .base import SqlRepositoryBase

CostField = Literal["shipping", "marketing", "overhead"]

COST_FIELD_COLUMNS: dict[str, str] = {
    "shipping": "shipping_cost",
    "marketing": "marketing_cost",
    "overhead": "overhead_cost",
}


@dataclass(frozen=True)
class MonthlyCost:
    """Fixed costs for one calendar month (``YYYY-MM``)."""

    id: str | None
    month: str
    shipping_cost: float = 0.0
    marketing_cost: float = 0.0
    overhead_cost: float = 0.0


class CostRepository(Protocol):
    """Monthly cost repository interface."""

    async def get_monthly_cost(self, month: str) -> MonthlyCost | None:
        ...

    async def create_or_update_monthly_cost(self, cost: MonthlyCost) -> MonthlyCost:
        ...

    async def update_monthly_cost_field(
        self, month: str, field: CostField, value: float
    ) -> MonthlyCost:
        ...


class SqlCostRepository(SqlRepositoryBase):
    """SQLAlchemy implementation of CostRepository (one row per month)."""

    async def get_monthly_cost(self, month: str) -> MonthlyCost | None:
        sql = text(
            """
            SELECT id, month, shipping_cost, marketing_cost, overhead_cost
            FROM monthly_costs
            WHERE month = :month
            """
        )
        records = as_records(await query_df(sql, {"month": month}, engine=self._engine))
        if not records:
            return None
        return self._row_to_cost(records[0])

    async def create_or_update_monthly_cost(self, cost: MonthlyCost) -> MonthlyCost:
        params = {
            "month": cost.month,
            "shipping_cost": float(cost.shipping_cost),
            "marketing_cost": float(cost.marketing_cost),
            "overhead_cost": float(cost.overhead_cost),
        }
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text(
                    """
                    UPDATE monthly_costs
                    SET shipping_cost = :shipping_cost,
                        marketing_cost = :marketing_cost,
                        overhead_cost = :overhead_cost
                    WHERE month = :month
                    """
                ),
                params,
            )
            if result.rowcount == 0:
                await conn.execute(
                    text(
                        """
                        INSERT INTO monthly_costs (id, month, shipping_cost, marketing_cost, overhead_cost)
                        VALUES (:id, :month, :shipping_cost, :marketing_cost, :overhead_cost)
                        """
                    ),
                    {**params, "id": str(uuid.uuid4())},
                )
        return await self._stored(cost.month)

    async def update_monthly_cost_field(
        self, month: str, field: CostField, value: float
    ) -> MonthlyCost:
        column = COST_FIELD_COLUMNS[field]
        current = await self.get_monthly_cost(month)
        if current is None:
            return await self.create_or_update_monthly_cost(
                MonthlyCost(id=None, month=month, **{column: float(value)})
            )
        await exec_sql(
            text(f"UPDATE monthly_costs SET {column} = :value WHERE month = :month"),
            {"value": float(value), "month": month},
            engine=self._engine,
        )
        return await self._stored(month)

    async def _stored(self, month: str) -> MonthlyCost:
        stored = await self.get_monthly_cost(month)
        if stored is None:
            raise MonthlyCostNotFoundError(f"Monthly cost for {month} not found after write")
        return stored

    def _row_to_cost(self, row: dict) -> MonthlyCost:
        return MonthlyCost(
            id=str(row["id"]),
            month=str(row["month"]),
            shipping_cost=float(row["shipping_cost"] or 0),
            marketing_cost=float(row["marketing_cost"] or 0),
            overhead_cost=float(row["overhead_cost"] or 0),
        )
