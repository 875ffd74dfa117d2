"""Unit tests for Product DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid(self):
        dto = CreateProductDTO(sku="abc-1", name="Widget", price=Decimal("9.99"))
        assert dto.sku == "ABC-1"
        assert dto.stock_quantity == 0

    def test_free_product_is_valid(self):
        dto = CreateProductDTO(sku="FREE", name="Sticker", price=Decimal("0"))
        assert dto.price == Decimal("0")

    def test_negative_price_raises(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            CreateProductDTO(sku="X", name="X", price=Decimal("-0.01"))

    def test_negative_stock_raises(self):
        with pytest.raises(ValidationError, match="Stock quantity cannot be negative"):
            CreateProductDTO(
                sku="X", name="X", price=Decimal("1"), stock_quantity=-1
            )

    def test_blank_sku_raises(self):
        with pytest.raises(ValidationError, match="SKU must not be empty"):
            CreateProductDTO(sku="   ", name="X", price=Decimal("1"))

    def test_is_immutable(self):
        dto = CreateProductDTO(sku="X", name="X", price=Decimal("1"))
        with pytest.raises(ValidationError):
            dto.price = Decimal("2")
