from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_product():
    """Factory for persisted products with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "sku": "SKU-001",
            "name": "Widget",
            "price": Decimal("100.00"),
            "stock_quantity": 10,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
