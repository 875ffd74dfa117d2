"""Integration tests for POST /api/v1/orders/.

Covers:
- 201 with the created order and the stock decrement.
- 404 / 409 / 503 mapped from the placement error kind.
- 400 on invalid payloads (standard error format).
- 401 without authentication.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import DatabaseError

from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


class TestPlaceOrderAPI:
    def test_creates_order(self, auth_client, make_product):
        product = make_product(stock_quantity=10, price=Decimal("100.00"))

        response = auth_client.post(
            URL, {"product_id": str(product.id), "quantity": 3}, format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["order"]["quantity"] == 3
        assert Decimal(body["order"]["total_price"]) == Decimal("300.00")
        assert body["order"]["product_id"] == str(product.id)
        assert body["order"]["product_sku"] == "SKU-001"
        product.refresh_from_db()
        assert product.stock_quantity == 7

    def test_large_total_returns_201(self, auth_client, make_product):
        product = make_product(stock_quantity=1000, price=Decimal("99999999.99"))

        response = auth_client.post(
            URL, {"product_id": str(product.id), "quantity": 101}, format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert Decimal(body["order"]["total_price"]) == Decimal("10099999998.99")
        order = Order.objects.get()
        assert order.total_price == Decimal("10099999998.99")
        product.refresh_from_db()
        assert product.stock_quantity == 899

    def test_insufficient_stock_returns_409(self, auth_client, make_product):
        product = make_product(stock_quantity=2)

        response = auth_client.post(
            URL, {"product_id": str(product.id), "quantity": 5}, format="json"
        )

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "insufficient_stock"
        product.refresh_from_db()
        assert product.stock_quantity == 2
        assert Order.objects.count() == 0

    def test_unknown_product_returns_404(self, auth_client):
        response = auth_client.post(
            URL, {"product_id": str(uuid4()), "quantity": 1}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"

    def test_storage_failure_returns_503(self, auth_client, make_product):
        product = make_product(stock_quantity=10)

        with patch.object(Order, "save", side_effect=DatabaseError("insert failed")):
            response = auth_client.post(
                URL, {"product_id": str(product.id), "quantity": 1}, format="json"
            )

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "storage_failure"
        product.refresh_from_db()
        assert product.stock_quantity == 10

    @pytest.mark.parametrize("quantity", [0, -3, "abc"])
    def test_invalid_quantity_returns_400(self, auth_client, make_product, quantity):
        product = make_product()

        response = auth_client.post(
            URL, {"product_id": str(product.id), "quantity": quantity}, format="json"
        )

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "client_error"
        assert body["errors"][0]["attr"] == "quantity"

    def test_missing_fields_returns_400(self, auth_client):
        response = auth_client.post(URL, {}, format="json")

        assert response.status_code == 400
        attrs = {error["attr"] for error in response.json()["errors"]}
        assert attrs == {"product_id", "quantity"}

    def test_unauthenticated_returns_401(self, api_client, make_product):
        product = make_product()

        response = api_client.post(
            URL, {"product_id": str(product.id), "quantity": 1}, format="json"
        )

        assert response.status_code == 401
        product.refresh_from_db()
        assert product.stock_quantity == 10
