"""Integration tests for GET /api/v1/orders/ and /api/v1/orders/{id}/."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.models import Order

pytestmark = pytest.mark.integration


@pytest.fixture()
def orders(make_product):
    cheap = make_product(sku="CHEAP", price=Decimal("5.00"))
    pricey = make_product(sku="PRICEY", price=Decimal("500.00"))
    return [
        Order.objects.create(product=cheap, quantity=2, total_price=Decimal("10.00")),
        Order.objects.create(
            product=pricey, quantity=1, total_price=Decimal("500.00")
        ),
    ]


class TestOrderList:
    def test_list_is_paginated(self, auth_client, orders):
        response = auth_client.get("/api/v1/orders/")
        assert response.status_code == 200
        assert response.data["count"] == 2
        assert len(response.data["results"]) == 2

    def test_filter_by_product(self, auth_client, orders):
        product_id = orders[0].product_id
        response = auth_client.get(f"/api/v1/orders/?product={product_id}")
        assert [o["id"] for o in response.data["results"]] == [str(orders[0].id)]

    def test_filter_by_min_total(self, auth_client, orders):
        response = auth_client.get("/api/v1/orders/?min_total=100")
        assert [o["product_sku"] for o in response.data["results"]] == ["PRICEY"]

    def test_ordering_by_total(self, auth_client, orders):
        response = auth_client.get("/api/v1/orders/?ordering=total_price")
        totals = [Decimal(o["total_price"]) for o in response.data["results"]]
        assert totals == sorted(totals)


class TestOrderRetrieve:
    def test_retrieve(self, auth_client, orders):
        order = orders[0]
        response = auth_client.get(f"/api/v1/orders/{order.id}/")
        assert response.status_code == 200
        assert response.data["quantity"] == 2
        assert response.data["product_sku"] == "CHEAP"

    def test_retrieve_missing_returns_404(self, auth_client):
        response = auth_client.get(
            "/api/v1/orders/00000000-0000-0000-0000-000000000000/"
        )
        assert response.status_code == 404

    def test_retrieve_invalid_id_returns_404(self, auth_client):
        response = auth_client.get("/api/v1/orders/not-a-uuid/")
        assert response.status_code == 404
