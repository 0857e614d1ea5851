"""SQL repositories exercised against an in-memory SQLite database (aiosqlite)."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from core.data_repository import exec_sql
from core.errors import ActivityNotFoundError, MonthlyCostNotFoundError, ProductNotFoundError
from core.repositories import (
    SqlActivityRepository,
    SqlCostRepository,
    SqlProductRepository,
    SqlStockMovementRepository,
)
from core.repositories.activities import ActivityType
from core.repositories.costs import MonthlyCost
from core.repositories.products import ProductType
from core.repositories.stock_movements import StockMovement, StockMovementSource
from core.schema import ensure_domain_tables
from tests.fakes import make_activity, make_product


def _with_database(scenario):
    async def _main():
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        try:
            await ensure_domain_tables(engine)
            return await scenario(engine)
        finally:
            await engine.dispose()

    return asyncio.run(_main())


def test_product_crud_and_stock_clamp():
    async def scenario(engine):
        repo = SqlProductRepository(engine)
        created = await repo.create(make_product(id=None, stock=3))
        fetched = await repo.get_by_id(created.id)
        updated = await repo.update(created.id, {"sale_price": 32.5, "type": ProductType.TROUSSE_ZIPPEE})
        after_sale = await repo.update_stock(created.id, -2)
        after_oversell = await repo.update_stock(created.id, -10)
        listed = await repo.list_all()
        return created, fetched, updated, after_sale, after_oversell, listed

    created, fetched, updated, after_sale, after_oversell, listed = _with_database(scenario)

    assert created.id
    assert fetched == created
    assert updated.sale_price == 32.5
    assert updated.type is ProductType.TROUSSE_ZIPPEE
    assert after_sale == 1
    assert after_oversell == 0
    assert [p.id for p in listed] == [created.id]


def test_product_missing_rows():
    async def scenario(engine):
        repo = SqlProductRepository(engine)
        assert await repo.get_by_id("missing") is None
        with pytest.raises(ProductNotFoundError):
            await repo.update("missing", {"stock": 2})
        with pytest.raises(ProductNotFoundError):
            await repo.update_stock("missing", 1)

    _with_database(scenario)


def test_catalog_models_and_coloris():
    async def scenario(engine):
        await exec_sql(
            "INSERT INTO product_models (id, type, name) VALUES (:id, :type, :name)",
            [
                {"id": "m1", "type": "POCHETTE_VOLANTS", "name": "Charlie"},
                {"id": "m2", "type": "POCHETTE_VOLANTS", "name": "Alma"},
                {"id": "m3", "type": "SAC_BANANE", "name": "Banane"},
            ],
            engine=engine,
        )
        await exec_sql(
            "INSERT INTO product_coloris (id, model_id, coloris) VALUES (:id, :model_id, :coloris)",
            [
                {"id": "c1", "model_id": "m1", "coloris": "Rose Marsala"},
                {"id": "c2", "model_id": "m1", "coloris": "Prune"},
            ],
            engine=engine,
        )
        repo = SqlProductRepository(engine)
        return (
            await repo.list_models_by_type(ProductType.POCHETTE_VOLANTS),
            await repo.list_coloris_by_model("m1"),
            await repo.get_model_by_id("m3"),
            await repo.get_coloris_by_id("nope"),
        )

    models, coloris, banane, missing = _with_database(scenario)

    assert [m.name for m in models] == ["Alma", "Charlie"]
    assert [c.coloris for c in coloris] == ["Prune", "Rose Marsala"]
    assert banane.type is ProductType.SAC_BANANE
    assert missing is None


def test_activity_repository_roundtrip():
    async def scenario(engine):
        products = SqlProductRepository(engine)
        product = await products.create(make_product(id=None))
        repo = SqlActivityRepository(engine)
        older = await repo.create(make_activity(id=None, date="2025-01-05T09:00:00.000Z", product_id=product.id))
        newer = await repo.create(
            make_activity(
                id=None,
                date="2025-02-05T09:00:00.000Z",
                type=ActivityType.OTHER,
                quantity=0,
                amount=-12.5,
                product_id=None,
                note="salon",
            )
        )
        patched = await repo.update(older.id, {"note": "cadeau", "type": ActivityType.STOCK_CORRECTION})
        listed = await repo.list_all()
        await repo.delete(newer.id)
        remaining = await repo.list_all()
        with pytest.raises(ActivityNotFoundError):
            await repo.update("missing", {"note": "x"})
        return older, newer, patched, listed, remaining

    older, newer, patched, listed, remaining = _with_database(scenario)

    assert patched.note == "cadeau"
    assert patched.type is ActivityType.STOCK_CORRECTION
    assert [a.id for a in listed] == [newer.id, older.id]
    assert listed[0].product_id is None
    assert listed[0].amount == -12.5
    assert [a.id for a in remaining] == [older.id]


def test_stock_movement_repository():
    async def scenario(engine):
        product = await SqlProductRepository(engine).create(make_product(id=None))
        repo = SqlStockMovementRepository(engine)
        created = await repo.create(
            StockMovement(id=None, product_id=product.id, quantity=-2, source=StockMovementSource.SALE)
        )
        return created, await repo.get_by_id(created.id), await repo.list_by_product(product.id), await repo.list_all()

    created, fetched, by_product, everything = _with_database(scenario)

    assert fetched == created
    assert fetched.source is StockMovementSource.SALE
    assert fetched.quantity == -2
    assert by_product == [created]
    assert everything == [created]


def test_cost_repository_upsert_and_field_update():
    async def scenario(engine):
        repo = SqlCostRepository(engine)
        first = await repo.create_or_update_monthly_cost(
            MonthlyCost(id=None, month="2025-01", shipping_cost=12, marketing_cost=30)
        )
        second = await repo.create_or_update_monthly_cost(MonthlyCost(id=None, month="2025-01", overhead_cost=7))
        patched = await repo.update_monthly_cost_field("2025-01", "marketing", 55)
        created_by_patch = await repo.update_monthly_cost_field("2025-02", "shipping", 4)
        return first, second, patched, created_by_patch, await repo.get_monthly_cost("2025-03")

    first, second, patched, created_by_patch, missing = _with_database(scenario)

    assert first.id == second.id
    assert second.shipping_cost == 0
    assert second.overhead_cost == 7
    assert patched.marketing_cost == 55
    assert patched.overhead_cost == 7
    assert created_by_patch.month == "2025-02"
    assert created_by_patch.shipping_cost == 4
    assert missing is None


def test_cost_repository_raises_when_row_vanishes_after_write():
    class _LosingCostRepository(SqlCostRepository):
        async def get_monthly_cost(self, month):
            return None

    async def scenario(engine):
        repo = _LosingCostRepository(engine)
        with pytest.raises(MonthlyCostNotFoundError, match="2025-04"):
            await repo.create_or_update_monthly_cost(MonthlyCost(id=None, month="2025-04", shipping_cost=3))
        with pytest.raises(MonthlyCostNotFoundError, match="2025-05"):
            await repo.update_monthly_cost_field("2025-05", "marketing", 9)

    _with_database(scenario)
