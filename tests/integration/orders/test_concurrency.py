"""Stock concurrency integration test.

Proves that concurrent placements on the same product never oversell:
the row lock in ``ProductDjangoRepository.get_for_update`` plus the
conditional decrement in ``reduce_stock`` serialise the stock check.

Scenario:
- Product with **stock = 5**.
- 10 threads attempt to buy 1 unit each simultaneously.
- Exactly 5 succeed, 5 are rejected with ``insufficient_stock``.
- Final stock is 0 (never negative).

Uses ``TransactionTestCase`` so each thread sees committed data.  Needs a
back-end with real row locking (PostgreSQL / MySQL); skipped on SQLite,
run with ``DATABASE_URL=postgres://...``.  ``TestStaleStockRead`` covers
the conditional decrement on every back-end.
"""

from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import connection, connections
from django.test import TransactionTestCase

from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import OrderErrorKind
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration

INITIAL_STOCK = 5
NUM_WORKERS = 10


@unittest.skipUnless(
    connection.features.has_select_for_update,
    "requires a database with SELECT ... FOR UPDATE",
)
class TestStockConcurrency(TransactionTestCase):
    def setUp(self):
        self.product = Product.objects.create(
            sku="GAMER-PC",
            name="Gamer PC",
            price=Decimal("2999.99"),
            stock_quantity=INITIAL_STOCK,
        )

    def _place_in_thread(self, _: int) -> str:
        try:
            service = OrderService(
                order_repository=OrderDjangoRepository(),
                product_repository=ProductDjangoRepository(),
            )
            result = service.place_order(
                PlaceOrderDTO(product_id=self.product.id, quantity=1)
            )
            return "success" if result.ok else result.error.value
        finally:
            connections.close_all()

    def _run(self) -> list[str]:
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            return list(pool.map(self._place_in_thread, range(NUM_WORKERS)))

    def test_concurrent_orders_exhaust_stock(self):
        results = self._run()

        self.assertEqual(results.count("success"), INITIAL_STOCK)
        self.assertEqual(
            results.count(OrderErrorKind.INSUFFICIENT_STOCK.value),
            NUM_WORKERS - INITIAL_STOCK,
        )
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 0)
        self.assertEqual(Order.objects.count(), INITIAL_STOCK)

    def test_sold_plus_remaining_equals_initial(self):
        results = self._run()

        self.product.refresh_from_db()
        self.assertGreaterEqual(self.product.stock_quantity, 0)
        self.assertEqual(
            INITIAL_STOCK,
            results.count("success") + self.product.stock_quantity,
        )


class TestStaleStockRead:
    """Runs on every back-end, SQLite included.

    Replays the interleaving a missing row lock allows: a placement reads
    the product, a competing placement takes the last unit, then the first
    one tries to decrement.
    """

    def test_conditional_decrement_rejects_stale_read(self, make_product):
        product = make_product(stock_quantity=1)
        stale = Product.objects.get(pk=product.pk)
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        dto = PlaceOrderDTO(product_id=product.id, quantity=1)

        assert service.place_order(dto).ok

        with patch.object(
            ProductDjangoRepository, "get_for_update", return_value=stale
        ):
            result = service.place_order(dto)

        assert result.error == OrderErrorKind.INSUFFICIENT_STOCK
        assert "changed concurrently" in result.detail
        product.refresh_from_db()
        assert product.stock_quantity == 0
        assert Order.objects.count() == 1
