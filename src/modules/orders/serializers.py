"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order


class PlaceOrderSerializer(serializers.Serializer):
    """Validates the order placement request payload."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with the product snapshot."""

    product_name = serializers.CharField(source="product.name", read_only=True)
    product_sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_sku",
            "quantity",
            "total_price",
            "created_at",
        ]
        read_only_fields = fields
