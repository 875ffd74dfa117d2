"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.  Engine errors
on the order-placement path are wrapped in ``StorageFailure``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, models, transaction
from django.db.models import F
from django.utils import timezone

from modules.core.repositories.exceptions import StorageFailure
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock_quantity__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            sku=entity.sku,
        )
        return entity

    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a product by SKU (case-insensitive via upper normalisation)."""
        return Product.objects.filter(sku=sku.strip().upper()).first()

    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock.

        Must run inside a transaction.  On back-ends without
        ``SELECT ... FOR UPDATE`` (SQLite) Django silently drops the lock;
        ``reduce_stock`` still guarantees stock never goes negative.
        """
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        except DatabaseError as exc:
            logger.error("product.lock_failed", product_id=str(id), error=str(exc))
            raise StorageFailure(f"Could not load product {id}.") from exc

    def reduce_stock(self, product: Product, quantity: int) -> Optional[Product]:
        """Conditional decrement: ``UPDATE ... WHERE stock_quantity >= quantity``."""
        try:
            updated = Product.objects.filter(
                id=product.id,
                stock_quantity__gte=quantity,
            ).update(
                stock_quantity=F("stock_quantity") - quantity,
                updated_at=timezone.now(),
            )
            if not updated:
                logger.warning(
                    "product.stock_reduction_rejected",
                    product_id=str(product.id),
                    quantity=quantity,
                )
                return None
            product.refresh_from_db(fields=["stock_quantity", "updated_at"])
        except DatabaseError as exc:
            logger.error(
                "product.stock_reduction_failed",
                product_id=str(product.id),
                error=str(exc),
            )
            raise StorageFailure(
                f"Could not reduce stock of product {product.id}."
            ) from exc

        logger.info(
            "product.stock_reduced",
            product_id=str(product.id),
            quantity=quantity,
            remaining=product.stock_quantity,
        )
        return product
