"""Order model.

Business rules implemented:
- An order references exactly one product (``PROTECT``: a product with
  orders cannot be hard-deleted).
- ``quantity`` is a positive integer.
- ``total_price`` is a snapshot of ``product.price * quantity`` computed by
  ``OrderService`` at placement time; later price changes never touch it.
- Orders are immutable once persisted.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.exceptions import ImmutableOrder


class Order(BaseModel):
    """Order aggregate root: one product, one quantity, one total."""

    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    # Fits Product.price (10 digits) times any PositiveIntegerField quantity.
    total_price: models.DecimalField = models.DecimalField(
        max_digits=22,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="orders_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gte=0),
                name="orders_total_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ImmutableOrder(f"Order {self.pk} cannot be modified.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.total_price})"
