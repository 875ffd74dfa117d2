"""Order service layer (Use Cases).

Holds the order-placement business rule and orchestrates the two
writes it implies (stock decrement + order creation) as a single
unit of work.  Persistence is delegated to the injected repositories.

Business rules enforced:
- The product must exist.
- Requested quantity must not exceed available stock; on rejection
  nothing is written.
- Stock never goes negative, even under concurrent placements
  (row lock + conditional decrement in the product repository).
- ``total_price`` is ``product.price * quantity`` at placement time.
- If persisting the order fails, the stock decrement is rolled back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.core.repositories.exceptions import StorageFailure
from modules.orders.dtos import PlaceOrderResult
from modules.orders.exceptions import (
    InsufficientStock,
    OrderErrorKind,
    OrderNotFound,
    PlaceOrderError,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import Queryable
    from modules.orders.dtos import PlaceOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place_order(self, dto: PlaceOrderDTO) -> PlaceOrderResult:
        """Place an order for ``dto.quantity`` units of ``dto.product_id``.

        Steps (one atomic transaction):
        1. Lock and load the product.
        2. Reject if stock is insufficient.
        3. Reduce stock.
        4. Compute total price.
        5. Persist the order.

        Never raises for business or storage failures: the outcome is
        returned as a ``PlaceOrderResult`` whose ``error`` is one of
        ``OrderErrorKind.NOT_FOUND``, ``INSUFFICIENT_STOCK`` or
        ``STORAGE_FAILURE``.
        """
        log = logger.bind(product_id=str(dto.product_id), quantity=dto.quantity)
        log.info("order.placement_started")

        try:
            with transaction.atomic():
                order = self._place(dto)
        except PlaceOrderError as exc:
            log.warning("order.placement_rejected", error=exc.kind.value)
            return PlaceOrderResult.failure(exc.kind, str(exc))
        except StorageFailure as exc:
            log.error("order.placement_failed", error=str(exc))
            return PlaceOrderResult.failure(OrderErrorKind.STORAGE_FAILURE, str(exc))

        log.info(
            "order.placed",
            order_id=str(order.id),
            total_price=str(order.total_price),
        )
        return PlaceOrderResult.success(order)

    def _place(self, dto: PlaceOrderDTO) -> Order:
        product = self._product_repo.get_for_update(str(dto.product_id))
        if not product:
            raise ProductNotFound(f"Product {dto.product_id} not found.")

        if product.stock_quantity < dto.quantity:
            raise InsufficientStock(
                f"Product {product.sku}: requested {dto.quantity}, "
                f"available {product.stock_quantity}."
            )

        # Stock may have moved since the read when the back-end cannot lock.
        if self._product_repo.reduce_stock(product, dto.quantity) is None:
            raise InsufficientStock(
                f"Product {product.sku}: requested {dto.quantity}, "
                f"stock changed concurrently."
            )

        total_price = product.price * dto.quantity

        return self._order_repo.create(
            {
                "product_id": product.id,
                "quantity": dto.quantity,
                "total_price": total_price,
            }
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> Queryable[Order]:
        """Return orders, optionally filtered."""
        return self._order_repo.list(filters)
