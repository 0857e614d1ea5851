"""Shared pytest fixtures for backend tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.dependencies.repositories import (
    get_activity_repository,
    get_cost_repository,
    get_product_repository,
    get_stock_movement_repository,
)
from tests.fakes import (
    FakeActivityRepository,
    FakeCostRepository,
    FakeProductRepository,
    FakeStockMovementRepository,
    make_activity,
    make_product,
)


@pytest.fixture
def product_repo() -> FakeProductRepository:
    return FakeProductRepository([make_product("p1", stock=10), make_product("p2", stock=2)])


@pytest.fixture
def activity_repo() -> FakeActivityRepository:
    return FakeActivityRepository(
        [
            make_activity("a1", date="2025-01-20T10:00:00.000Z", quantity=-3, amount=60),
            make_activity("a2", date="2025-01-25T15:30:00.000Z", quantity=-1, amount=25),
        ]
    )


@pytest.fixture
def movement_repo() -> FakeStockMovementRepository:
    return FakeStockMovementRepository()


@pytest.fixture
def cost_repo() -> FakeCostRepository:
    return FakeCostRepository()


@pytest.fixture
def client(product_repo, activity_repo, movement_repo, cost_repo) -> TestClient:
    """TestClient wired to in-memory repositories (lifespan not started, no database)."""
    from backend.main import app

    app.dependency_overrides[get_product_repository] = lambda: product_repo
    app.dependency_overrides[get_activity_repository] = lambda: activity_repo
    app.dependency_overrides[get_stock_movement_repository] = lambda: movement_repo
    app.dependency_overrides[get_cost_repository] = lambda: cost_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
