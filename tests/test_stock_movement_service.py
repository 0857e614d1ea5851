import asyncio
import math

import pytest

from core import stock_movement_service
from core.errors import DomainValidationError
from core.repositories.stock_movements import StockMovement, StockMovementSource
from tests.fakes import FakeStockMovementRepository


def _movement(**overrides):
    values = {
        "id": None,
        "product_id": "p1",
        "quantity": 5.0,
        "source": StockMovementSource.CREATION,
    }
    values.update(overrides)
    return StockMovement(**values)


def test_create_stock_movement_delegates_to_repository():
    repo = FakeStockMovementRepository()

    created = asyncio.run(stock_movement_service.create_stock_movement(repo, _movement()))

    assert created.id == "mvt-1"
    assert created.quantity == 5.0
    assert repo.called("create")


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"product_id": ""}, "productId is required for stock movement"),
        ({"product_id": None}, "productId is required for stock movement"),
        ({"quantity": math.nan}, "quantity must be a valid number"),
        ({"quantity": math.inf}, "quantity must be a finite number"),
        ({"quantity": -math.inf}, "quantity must be a finite number"),
        ({"quantity": 0}, "quantity must be non-zero"),
        ({"source": "RESTOCK"}, "Invalid source value: RESTOCK"),
        ({"quantity": -5.0}, "Stock movement validation failed"),
        ({"product_id": "   "}, "Stock movement validation failed"),
    ],
)
def test_invalid_movements_are_rejected_before_storage(overrides, message):
    repo = FakeStockMovementRepository()

    with pytest.raises(DomainValidationError) as excinfo:
        asyncio.run(stock_movement_service.create_stock_movement(repo, _movement(**overrides)))

    assert excinfo.value.message == message
    assert excinfo.value.code == "VALIDATION_ERROR"
    assert repo.calls == []


def test_sale_and_adjustment_sources_accept_their_signs():
    repo = FakeStockMovementRepository()

    asyncio.run(
        stock_movement_service.create_stock_movement(
            repo, _movement(quantity=-2, source=StockMovementSource.SALE)
        )
    )
    asyncio.run(
        stock_movement_service.create_stock_movement(
            repo, _movement(quantity=-7, source=StockMovementSource.INVENTORY_ADJUSTMENT)
        )
    )

    assert [m.quantity for m in repo.movements] == [-2, -7]


def test_repository_errors_propagate_unchanged():
    class _Boom(RuntimeError):
        pass

    class _FailingRepo(FakeStockMovementRepository):
        async def create(self, movement):
            raise _Boom("storage down")

    with pytest.raises(_Boom, match="storage down"):
        asyncio.run(stock_movement_service.create_stock_movement(_FailingRepo(), _movement()))


def test_list_helpers_delegate():
    repo = FakeStockMovementRepository(
        [
            _movement(id="m1", product_id="p1"),
            _movement(id="m2", product_id="p2"),
        ]
    )

    assert len(asyncio.run(stock_movement_service.list_stock_movements(repo))) == 2
    by_product = asyncio.run(stock_movement_service.list_stock_movements_by_product(repo, "p2"))
    assert [m.id for m in by_product] == ["m2"]
