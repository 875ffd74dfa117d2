"""Order domain exceptions and error kinds.

Each order-placement failure has its own exception class carrying an
``OrderErrorKind``, so callers can tell an unknown product from missing
stock or a broken database without parsing messages.  Storage errors are
raised by the repositories as
``modules.core.repositories.exceptions.StorageFailure`` and reported by the
service under ``OrderErrorKind.STORAGE_FAILURE``.
"""

from __future__ import annotations

from django.db import models


class OrderErrorKind(models.TextChoices):
    NOT_FOUND = "not_found", "Product not found"
    INSUFFICIENT_STOCK = "insufficient_stock", "Insufficient stock"
    STORAGE_FAILURE = "storage_failure", "Storage failure"


class PlaceOrderError(Exception):
    """Base class for business-rule violations while placing an order."""

    kind: OrderErrorKind


class ProductNotFound(PlaceOrderError):
    """The product referenced by the order does not exist."""

    kind = OrderErrorKind.NOT_FOUND


class InsufficientStock(PlaceOrderError):
    """The requested quantity exceeds the product's available stock."""

    kind = OrderErrorKind.INSUFFICIENT_STOCK


class OrderNotFound(Exception):
    """The requested order does not exist."""


class ImmutableOrder(Exception):
    """An already persisted order was about to be modified."""
