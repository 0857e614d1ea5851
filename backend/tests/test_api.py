"""HTTP contract of the routers: status codes, payloads and error mapping."""

from __future__ import annotations

import pytest


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_and_get_products(client):
    listed = client.get("/products")
    single = client.get("/products/p2")

    assert listed.status_code == 200
    assert {p["id"] for p in listed.json()["items"]} == {"p1", "p2"}
    assert single.json()["type"] == "SAC_BANANE"


def test_unknown_product_maps_to_404(client):
    response = client.get("/products/ghost")

    assert response.status_code == 404
    assert response.json() == {"detail": "Product with id ghost not found", "code": "NOT_FOUND"}


def test_low_stock_products(client):
    response = client.get("/products/low-stock", params={"threshold": 5})

    assert [p["id"] for p in response.json()["items"]] == ["p2"]


def test_create_product_validation_error_maps_to_422(client, product_repo):
    response = client.post(
        "/products",
        json={"unit_cost": 10, "sale_price": 20, "stock": 1, "name": "Charlie", "type": "SAC_BANANE"},
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Product validation failed", "code": "VALIDATION_ERROR"}
    assert not product_repo.called("create")


def test_create_and_patch_product(client):
    created = client.post(
        "/products",
        json={
            "unit_cost": 12,
            "sale_price": 30,
            "stock": 4,
            "name": "Charlie",
            "type": "POCHETTE_VOLANTS",
            "coloris": "Prune",
        },
    )
    product_id = created.json()["id"]
    patched = client.patch(f"/products/{product_id}", json={"sale_price": 35})

    assert created.status_code == 201
    assert patched.status_code == 200
    assert patched.json()["sale_price"] == 35
    assert patched.json()["coloris"] == "Prune"


def test_create_sale_activity_updates_stock(client, product_repo):
    response = client.post(
        "/activities",
        json={"date": "2025-02-01T09:00:00.000Z", "type": "SALE", "quantity": -2, "amount": 50, "product_id": "p1"},
    )

    assert response.status_code == 201
    assert response.json()["id"] == "act-1"
    assert product_repo.products["p1"].stock == 8


@pytest.mark.parametrize(
    ("payload", "detail"),
    [
        ({"date": "2025-02-01T09:00:00Z", "type": "SALE", "quantity": -1, "amount": 10}, "productId is required for SALE activity type"),
        ({"date": "01/02/2025", "type": "CREATION", "quantity": 1, "amount": 0}, "date must be a valid ISO 8601 string"),
    ],
)
def test_create_activity_rejections(client, activity_repo, payload, detail):
    response = client.post("/activities", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"] == detail
    assert not activity_repo.called("create")


def test_patch_unknown_activity_maps_to_404(client):
    response = client.patch("/activities/missing", json={"note": "x"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_paginated_activities(client):
    response = client.get("/activities", params={"page": 1, "page_size": 1})
    body = response.json()

    assert body["total"] == 2
    assert body["total_pages"] == 2
    assert body["page_size"] == 1
    assert [a["id"] for a in body["items"]] == ["a2"]


def test_activities_invalid_window(client):
    response = client.get("/activities", params={"start_date": "yesterday"})

    assert response.status_code == 422
    assert response.json()["detail"] == "startDate must be a valid ISO 8601 string"


def test_recent_activities_and_ledger_stock(client):
    recent = client.get("/activities/recent", params={"limit": 1}).json()
    stock = client.get("/activities/stock").json()

    assert [a["id"] for a in recent] == ["a2"]
    assert stock == {"p1": -4.0}


def test_stock_movements_endpoints(client, movement_repo):
    created = client.post("/stock/movements", json={"product_id": "p1", "quantity": 3, "source": "CREATION"})
    rejected = client.post("/stock/movements", json={"product_id": "p1", "quantity": 3, "source": "RESTOCK"})
    listed = client.get("/stock/movements/product/p1")

    assert created.status_code == 201
    assert rejected.status_code == 422
    assert rejected.json()["detail"] == "Invalid source value: RESTOCK"
    assert [m["id"] for m in listed.json()["items"]] == [created.json()["id"]]


def test_revenue_report(client):
    response = client.get(
        "/reports/revenue",
        params={
            "start_date": "2025-01-20T00:00:00.000Z",
            "end_date": "2025-01-31T23:59:59.999Z",
            "period": "MONTH",
        },
    )
    body = response.json()

    assert response.status_code == 200
    assert body["period"] == "MONTH"
    assert body["total_revenue"] == 85
    assert body["material_costs"] == 40
    assert body["gross_margin"] == 45
    assert body["gross_margin_rate"] == pytest.approx(52.94, abs=0.01)


def test_revenue_report_invalid_dates(client, activity_repo):
    response = client.get(
        "/reports/revenue",
        params={"start_date": "2025-01-20", "end_date": "2025-01-31T23:59:59Z"},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "startDate must be a valid ISO 8601 string"
    assert activity_repo.calls == []


def test_statistics_endpoints(client):
    profits = client.get("/statistics/profits", params={"period": "MONTHLY"}).json()
    sales = client.get("/statistics/sales").json()
    summary = client.get("/statistics/summary").json()

    assert [p["period"] for p in profits] == ["2025-01"]
    assert profits[0]["profit"] == 60
    assert sales == {"value": 85}
    assert summary["total_sales"] == 85
    assert summary["product_margins"][0]["product_id"] == "p1"


def test_monthly_costs(client):
    missing = client.get("/costs/2025-01")
    stored = client.put("/costs/2025-01", json={"shipping_cost": 15, "marketing_cost": 40})
    patched = client.patch("/costs/2025-01", json={"field": "overhead", "value": 22.5})
    bad_month = client.get("/costs/2025-13")

    assert missing.status_code == 404
    assert stored.json()["shipping_cost"] == 15
    assert patched.json()["overhead_cost"] == 22.5
    assert patched.json()["marketing_cost"] == 40
    assert bad_month.status_code == 422
    assert "Expected YYYY-MM format" in bad_month.json()["detail"]
