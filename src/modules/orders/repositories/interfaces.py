"""Order repository interface.

Extends ``IRepository[Order]`` with the single write the order
placement use-case needs: persisting a brand-new order.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository, Queryable

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    Orders are append-only: once created they are never updated.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Durably persist a new order.

        ``data`` must include ``product_id``, ``quantity`` and
        ``total_price``.

        Raises:
            StorageFailure: the storage engine failed.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its product eager-loaded."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[Order]:
        """List orders with optional filters."""
