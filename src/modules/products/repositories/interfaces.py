"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
catalogue (unique SKU) and the stock operations used when placing
an order.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository, Queryable

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[Product]:
        """List products with optional filters."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a product by SKU."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Used by the order service before checking stock.  Returns ``None``
        if the product does not exist.

        Raises:
            StorageFailure: the storage engine failed.
        """

    @abstractmethod
    def reduce_stock(self, product: Product, quantity: int) -> Optional[Product]:
        """Atomically decrement ``product``'s stock by ``quantity``.

        The decrement only applies while the stored stock is still at
        least ``quantity``; stock never goes negative.  Returns the product
        with its refreshed ``stock_quantity``, or ``None`` when the stored
        stock no longer covers the request.

        Raises:
            StorageFailure: the storage engine failed.
        """
