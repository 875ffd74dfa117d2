"""Product service layer (Use Cases).

Orchestrates catalogue operations for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.  Stock is never
edited here: placing an order is the only operation that reduces it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import Queryable
    from modules.products.dtos import CreateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Register a new product after enforcing SKU uniqueness.

        Raises:
            ProductAlreadyExists: if the SKU is already taken.
        """
        log = logger.bind(sku=dto.sku)

        if self._repo.get_by_sku(dto.sku):
            log.warning("product.duplicate_sku")
            raise ProductAlreadyExists(f"SKU '{dto.sku}' already registered.")

        product = Product(
            sku=dto.sku,
            name=dto.name,
            price=dto.price,
            stock_quantity=dto.stock_quantity,
        )
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> Queryable[Product]:
        """Return products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
