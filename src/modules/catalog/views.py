"""Catalog API views (read-only product list and order quotes)."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.catalog.dtos import OrderLineDTO
from modules.catalog.exceptions import ProductNotFound
from modules.catalog.serializers import QuoteSerializer
from modules.core.api import (
    ContainerMixin,
    entity_response,
    list_response,
    translate_domain_errors,
)


class ProductViewSet(ContainerMixin, ViewSet):
    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?category=fruits"""
        category = request.query_params.get("category")
        catalog = self.services.catalog
        try:
            if category:
                products = catalog.get_products_by_category(category)
            else:
                products = catalog.list_products()
        except ValueError:
            return Response(
                {"detail": f"Unknown category {category}."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return list_response(products)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        return entity_response(self.services.catalog.get_product(pk), "Product")

    @action(detail=False, methods=["post"])
    @translate_domain_errors
    def quote(self, request: Request) -> Response:
        """POST /api/v1/products/quote/

        Prices order lines without placing an order.
        """
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            items = self.services.catalog.build_order_items(
                OrderLineDTO(**line) for line in serializer.validated_data["items"]
            )
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        total = sum((item.price * item.quantity for item in items), Decimal("0"))
        return Response(
            {
                "items": [item.model_dump(mode="json", by_alias=True) for item in items],
                "totalAmount": str(total),
            }
        )
