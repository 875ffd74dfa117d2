"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Writes run inside ``transaction.atomic()`` (a savepoint when the caller
already opened a transaction), and any ``DatabaseError`` is re-raised as
``StorageFailure`` so the caller's transaction unwinds as a whole.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, models, transaction

from modules.core.repositories.exceptions import StorageFailure
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order from ``product_id``, ``quantity`` and ``total_price``."""
        order = Order(
            product_id=data["product_id"],
            quantity=data["quantity"],
            total_price=data["total_price"],
        )
        return self.save(order)

    def save(self, entity: Order) -> Order:
        """Persist a new order.  Existing orders raise ``ImmutableOrder``."""
        try:
            with transaction.atomic():
                entity.save()
        except DatabaseError as exc:
            logger.error(
                "order.persist_failed",
                product_id=str(entity.product_id),
                error=str(exc),
            )
            raise StorageFailure("Could not persist order.") from exc

        logger.info(
            "order.saved",
            order_id=str(entity.id),
            product_id=str(entity.product_id),
            quantity=entity.quantity,
        )
        return entity

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its product (single JOIN).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_related("product").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Order]:
        """List orders with optional filters.

        Supported filter keys include ``product_id`` and
        ``created_at__range``.
        """
        queryset = Order.objects.select_related("product")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset
