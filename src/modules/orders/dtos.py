"""Order DTOs for the Service Layer.

- ``PlaceOrderDTO``: input for order placement (Pydantic v2, frozen).
- ``PlaceOrderResult``: outcome of ``OrderService.place_order``: either
  the created order or an ``OrderErrorKind`` with a message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

from modules.orders.exceptions import OrderErrorKind

if TYPE_CHECKING:
    from modules.orders.models import Order


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for an order placement request.

    ``total_price`` is not part of the input: it is resolved by the
    Service Layer from the product's current price.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: StrictInt

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


@dataclass(frozen=True)
class PlaceOrderResult:
    order: Optional[Order] = None
    error: Optional[OrderErrorKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, order: Order) -> PlaceOrderResult:
        return cls(order=order)

    @classmethod
    def failure(cls, error: OrderErrorKind, detail: str) -> PlaceOrderResult:
        return cls(error=error, detail=detail)
