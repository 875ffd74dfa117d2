"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.models import Product


class CreateProductSerializer(serializers.Serializer):
    """Validates the product creation request payload."""

    sku = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.00")
    )
    stock_quantity = serializers.IntegerField(min_value=0, default=0)


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "price",
            "stock_quantity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
