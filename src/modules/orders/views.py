"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Placement outcomes are mapped onto HTTP status codes from their
``OrderErrorKind``; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import OrderErrorKind, OrderNotFound
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer, PlaceOrderSerializer
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository

ERROR_STATUS = {
    OrderErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OrderErrorKind.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    OrderErrorKind.STORAGE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total_price", "quantity"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttle scopes per action."""
        if self.action == "create":
            self.throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            self.throttle_scope = "order_listing"
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Returns 201 ``{"success": true, "order": {...}}`` or
        ``{"success": false, "error": {"code": ..., "detail": ...}}``
        with 404 (unknown product), 409 (insufficient stock) or
        503 (storage failure).
        """
        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        dto = PlaceOrderDTO(product_id=data["product_id"], quantity=data["quantity"])

        result = self._service.place_order(dto)
        if not result.ok:
            return Response(
                {
                    "success": False,
                    "error": {"code": result.error.value, "detail": result.detail},
                },
                status=ERROR_STATUS[result.error],
            )

        return Response(
            {"success": True, "order": OrderSerializer(result.order).data},
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (product, date range, total range) is handled by
        ``OrderFilter``; ordering by ``OrderingFilter``.  Paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        if pk is None:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(order).data)
