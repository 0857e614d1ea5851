"""In-memory repositories for usecase and API tests.

Each fake records the calls it receives in ``calls`` so tests can assert that a
rejected input never reached storage.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from core.errors import ActivityNotFoundError, ProductNotFoundError
from core.repositories.activities import Activity, ActivityType
from core.repositories.costs import COST_FIELD_COLUMNS, MonthlyCost
from core.repositories.products import Product, ProductColoris, ProductModel, ProductType
from core.repositories.stock_movements import StockMovement


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self._next_id = 0

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    def called(self, name: str) -> bool:
        return any(call == name for call, _ in self.calls)


class FakeProductRepository(_Recorder):
    def __init__(
        self,
        products: list[Product] | None = None,
        models: list[ProductModel] | None = None,
        coloris: list[ProductColoris] | None = None,
        fail_update_stock: Exception | None = None,
    ) -> None:
        super().__init__()
        self.products = {p.id: p for p in products or []}
        self.models = list(models or [])
        self.coloris = list(coloris or [])
        self.fail_update_stock = fail_update_stock

    async def list_all(self):
        self._record("list_all")
        return list(self.products.values())

    async def get_by_id(self, id: str):
        self._record("get_by_id", id)
        return self.products.get(id)

    async def create(self, product: Product):
        self._record("create", product)
        created = replace(product, id=self._new_id("prod"))
        self.products[created.id] = created
        return created

    async def update(self, id: str, changes: Mapping[str, Any]):
        self._record("update", id, dict(changes))
        if id not in self.products:
            raise ProductNotFoundError(f"Product with id {id} not found")
        self.products[id] = replace(self.products[id], **changes)
        return self.products[id]

    async def update_stock(self, id: str, delta: float):
        self._record("update_stock", id, delta)
        if self.fail_update_stock is not None:
            raise self.fail_update_stock
        if id not in self.products:
            raise ProductNotFoundError(f"Product with id {id} not found")
        product = self.products[id]
        new_stock = max(0.0, product.stock + delta)
        self.products[id] = replace(product, stock=new_stock)
        return new_stock

    async def list_models_by_type(self, type: ProductType):
        self._record("list_models_by_type", type)
        return [m for m in self.models if m.type == type]

    async def list_coloris_by_model(self, model_id: str):
        self._record("list_coloris_by_model", model_id)
        return [c for c in self.coloris if c.model_id == model_id]

    async def get_model_by_id(self, id: str):
        self._record("get_model_by_id", id)
        return next((m for m in self.models if m.id == id), None)

    async def get_coloris_by_id(self, id: str):
        self._record("get_coloris_by_id", id)
        return next((c for c in self.coloris if c.id == id), None)


class FakeActivityRepository(_Recorder):
    def __init__(
        self,
        activities: list[Activity] | None = None,
        fail_delete: Exception | None = None,
    ) -> None:
        super().__init__()
        self.activities = {a.id: a for a in activities or []}
        self.fail_delete = fail_delete

    async def list_all(self):
        self._record("list_all")
        return list(self.activities.values())

    async def get_by_id(self, id: str):
        self._record("get_by_id", id)
        return self.activities.get(id)

    async def create(self, activity: Activity):
        self._record("create", activity)
        created = replace(activity, id=self._new_id("act"))
        self.activities[created.id] = created
        return created

    async def update(self, id: str, changes: Mapping[str, Any]):
        self._record("update", id, dict(changes))
        if id not in self.activities:
            raise ActivityNotFoundError(f"Activity with id {id} not found")
        self.activities[id] = replace(self.activities[id], **changes)
        return self.activities[id]

    async def delete(self, id: str):
        self._record("delete", id)
        if self.fail_delete is not None:
            raise self.fail_delete
        self.activities.pop(id, None)


class FakeStockMovementRepository(_Recorder):
    def __init__(self, movements: list[StockMovement] | None = None) -> None:
        super().__init__()
        self.movements = list(movements or [])

    async def list_all(self):
        self._record("list_all")
        return list(self.movements)

    async def get_by_id(self, id: str):
        self._record("get_by_id", id)
        return next((m for m in self.movements if m.id == id), None)

    async def list_by_product(self, product_id: str):
        self._record("list_by_product", product_id)
        return [m for m in self.movements if m.product_id == product_id]

    async def create(self, movement: StockMovement):
        self._record("create", movement)
        created = replace(movement, id=self._new_id("mvt"))
        self.movements.append(created)
        return created


class FakeCostRepository(_Recorder):
    def __init__(self, costs: list[MonthlyCost] | None = None) -> None:
        super().__init__()
        self.costs = {c.month: c for c in costs or []}

    async def get_monthly_cost(self, month: str):
        self._record("get_monthly_cost", month)
        return self.costs.get(month)

    async def create_or_update_monthly_cost(self, cost: MonthlyCost):
        self._record("create_or_update_monthly_cost", cost)
        existing = self.costs.get(cost.month)
        stored = replace(cost, id=existing.id if existing else self._new_id("cost"))
        self.costs[cost.month] = stored
        return stored

    async def update_monthly_cost_field(self, month: str, field: str, value: float):
        self._record("update_monthly_cost_field", month, field, value)
        current = self.costs.get(month) or MonthlyCost(id=self._new_id("cost"), month=month)
        self.costs[month] = replace(current, **{COST_FIELD_COLUMNS[field]: value})
        return self.costs[month]


def make_product(id: str = "p1", **overrides: Any) -> Product:
    values: dict[str, Any] = {
        "id": id,
        "unit_cost": 10.0,
        "sale_price": 25.0,
        "stock": 10.0,
        "name": "Banane Charlie",
        "type": ProductType.SAC_BANANE,
        "coloris": "Rose Marsala",
    }
    values.update(overrides)
    return Product(**values)


def make_activity(id: str = "a1", **overrides: Any) -> Activity:
    values: dict[str, Any] = {
        "id": id,
        "date": "2025-01-20T10:00:00.000Z",
        "type": ActivityType.SALE,
        "quantity": -1.0,
        "amount": 25.0,
        "product_id": "p1",
    }
    values.update(overrides)
    return Activity(**values)
