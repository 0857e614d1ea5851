"""
Product Repository - Data access for products, product_models and product_coloris tables.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence, Union

from sqlalchemy import text

from core.data_repository import as_records, query_df
from core.errors import ProductNotFoundError

from .base import Repository, SqlRepositoryBase


class ProductType(str, Enum):
    SAC_BANANE = "SAC_BANANE"
    POCHETTE_ORDINATEUR = "POCHETTE_ORDINATEUR"
    TROUSSE_TOILETTE = "TROUSSE_TOILETTE"
    POCHETTE_VOLANTS = "POCHETTE_VOLANTS"
    TROUSSE_ZIPPEE = "TROUSSE_ZIPPEE"
    ACCESSOIRES_DIVERS = "ACCESSOIRES_DIVERS"


@dataclass(frozen=True)
class ProductModel:
    """Named design within a product category."""

    id: str | None
    type: ProductType
    name: str


@dataclass(frozen=True)
class ProductColoris:
    """Colour/finish variant of a model."""

    id: str | None
    model_id: str
    coloris: str


@dataclass(frozen=True)
class LegacyNaming:
    name: str
    type: ProductType
    coloris: str


@dataclass(frozen=True)
class NormalizedNaming:
    model_id: str
    coloris_id: str


ProductNaming = Union[LegacyNaming, NormalizedNaming]


@dataclass(frozen=True)
class Product:
    """Product entity.

    Naming is either legacy (name/type/coloris) or normalized (model_id/coloris_id)
    while the catalogue migration is in progress.
    """

    id: str | None
    unit_cost: float
    sale_price: float
    stock: float
    weight: float | None = None
    name: str | None = None
    type: ProductType | None = None
    coloris: str | None = None
    model_id: str | None = None
    coloris_id: str | None = None


class ProductRepository(Repository[Product], Protocol):
    """Product repository interface (products plus the model/coloris catalogue)."""

    async def update_stock(self, id: str, delta: float) -> float:
        """Add ``delta`` to the stock atomically (clamped at 0) and return the new level."""
        ...

    async def list_models_by_type(self, type: ProductType) -> Sequence[ProductModel]:
        ...

    async def list_coloris_by_model(self, model_id: str) -> Sequence[ProductColoris]:
        ...

    async def get_model_by_id(self, id: str) -> ProductModel | None:
        ...

    async def get_coloris_by_id(self, id: str) -> ProductColoris | None:
        ...


_PRODUCT_COLUMNS = "id, name, type, coloris, model_id, coloris_id, unit_cost, sale_price, stock, weight"
_UPDATABLE_FIELDS = {
    "name",
    "type",
    "coloris",
    "model_id",
    "coloris_id",
    "unit_cost",
    "sale_price",
    "stock",
    "weight",
}


class SqlProductRepository(SqlRepositoryBase):
    """SQLAlchemy implementation of ProductRepository."""

    async def list_all(self) -> Sequence[Product]:
        sql = text(
            f"""
            SELECT {_PRODUCT_COLUMNS}
            FROM products
            ORDER BY created_at DESC, id ASC
            """
        )
        df = await query_df(sql, engine=self._engine)
        return [self._row_to_product(row) for row in as_records(df)]

    async def get_by_id(self, id: str) -> Product | None:
        sql = text(
            f"""
            SELECT {_PRODUCT_COLUMNS}
            FROM products
            WHERE id = :id
            """
        )
        records = as_records(await query_df(sql, {"id": id}, engine=self._engine))
        if not records:
            return None
        return self._row_to_product(records[0])

    async def create(self, product: Product) -> Product:
        sql = text(
            """
            INSERT INTO products (
                id, name, type, coloris, model_id, coloris_id,
                unit_cost, sale_price, stock, weight
            )
            VALUES (
                :id, :name, :type, :coloris, :model_id, :coloris_id,
                :unit_cost, :sale_price, :stock, :weight
            )
            """
        )
        created = replace(product, id=str(uuid.uuid4()))
        async with self._engine.begin() as conn:
            await conn.execute(sql, self._product_to_params(created))
        return created

    async def update(self, id: str, changes: Mapping[str, Any]) -> Product:
        fields = {key: value for key, value in changes.items() if key in _UPDATABLE_FIELDS}
        if fields:
            assignments = ", ".join(f"{key} = :{key}" for key in sorted(fields))
            params = {key: _enum_value(value) for key, value in fields.items()}
            params["id"] = id
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    text(f"UPDATE products SET {assignments} WHERE id = :id"),
                    params,
                )
                if result.rowcount == 0:
                    raise ProductNotFoundError(f"Product with id {id} not found")
        updated = await self.get_by_id(id)
        if updated is None:
            raise ProductNotFoundError(f"Product with id {id} not found")
        return updated

    async def update_stock(self, id: str, delta: float) -> float:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text(
                    """
                    UPDATE products
                    SET stock = CASE WHEN stock + :delta < 0 THEN 0 ELSE stock + :delta END
                    WHERE id = :id
                    """
                ),
                {"id": id, "delta": float(delta)},
            )
            if result.rowcount == 0:
                raise ProductNotFoundError(f"Product with id {id} not found")
            row = (
                await conn.execute(text("SELECT stock FROM products WHERE id = :id"), {"id": id})
            ).fetchone()
        return float(row[0])

    async def list_models_by_type(self, type: ProductType) -> Sequence[ProductModel]:
        sql = text(
            """
            SELECT id, type, name
            FROM product_models
            WHERE type = :type
            ORDER BY name ASC
            """
        )
        df = await query_df(sql, {"type": _enum_value(type)}, engine=self._engine)
        return [self._row_to_model(row) for row in as_records(df)]

    async def list_coloris_by_model(self, model_id: str) -> Sequence[ProductColoris]:
        sql = text(
            """
            SELECT id, model_id, coloris
            FROM product_coloris
            WHERE model_id = :model_id
            ORDER BY coloris ASC
            """
        )
        df = await query_df(sql, {"model_id": model_id}, engine=self._engine)
        return [self._row_to_coloris(row) for row in as_records(df)]

    async def get_model_by_id(self, id: str) -> ProductModel | None:
        sql = text("SELECT id, type, name FROM product_models WHERE id = :id")
        records = as_records(await query_df(sql, {"id": id}, engine=self._engine))
        return self._row_to_model(records[0]) if records else None

    async def get_coloris_by_id(self, id: str) -> ProductColoris | None:
        sql = text("SELECT id, model_id, coloris FROM product_coloris WHERE id = :id")
        records = as_records(await query_df(sql, {"id": id}, engine=self._engine))
        return self._row_to_coloris(records[0]) if records else None

    def _product_to_params(self, product: Product) -> dict[str, Any]:
        return {
            "id": product.id,
            "name": product.name,
            "type": _enum_value(product.type),
            "coloris": product.coloris,
            "model_id": product.model_id,
            "coloris_id": product.coloris_id,
            "unit_cost": float(product.unit_cost),
            "sale_price": float(product.sale_price),
            "stock": float(product.stock),
            "weight": self._as_float(product.weight),
        }

    def _row_to_product(self, row: dict) -> Product:
        return Product(
            id=str(row["id"]),
            unit_cost=float(row["unit_cost"]),
            sale_price=float(row["sale_price"]),
            stock=float(row["stock"]),
            weight=self._as_float(row.get("weight")),
            name=row.get("name"),
            type=ProductType(row["type"]) if row.get("type") else None,
            coloris=row.get("coloris"),
            model_id=str(row["model_id"]) if row.get("model_id") else None,
            coloris_id=str(row["coloris_id"]) if row.get("coloris_id") else None,
        )

    def _row_to_model(self, row: dict) -> ProductModel:
        return ProductModel(id=str(row["id"]), type=ProductType(row["type"]), name=row["name"])

    def _row_to_coloris(self, row: dict) -> ProductColoris:
        return ProductColoris(id=str(row["id"]), model_id=str(row["model_id"]), coloris=row["coloris"])


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
