"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are translated into HTTP status codes by
``translate_domain_errors``; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.constants import UserRole
from modules.catalog.dtos import OrderLineDTO
from modules.catalog.exceptions import ProductNotFound
from modules.core.api import (
    ContainerMixin,
    entity_response,
    list_response,
    serialize,
    translate_domain_errors,
)
from modules.orders.dtos import CreateOrderDTO
from modules.orders.serializers import (
    AssignVendorSerializer,
    CancelSerializer,
    CreateOrderSerializer,
    UpdateStatusSerializer,
)


class OrderViewSet(ContainerMixin, ViewSet):
    """ViewSet for Order operations.

    Lists are scoped to the caller: kitchens see their orders, suppliers
    the orders they accepted (or, with ``?pending=true``, the ones waiting
    for them), vendors the orders routed to them, transporters the orders
    they carry and admins everything.
    """

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @translate_domain_errors
    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/ (kitchen)"""
        kitchen = self.require_role(request, UserRole.KITCHEN)
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            items = self.services.catalog.build_order_items(
                OrderLineDTO(**line) for line in data["items"]
            )
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        order = self.services.orders.create_order(
            CreateOrderDTO(
                kitchen_id=kitchen.id,
                items=items,
                kitchen_name=data.get("kitchen_name"),
                kitchen_address=data.get("kitchen_address"),
                notes=data.get("notes"),
            )
        )
        return entity_response(order, "Kitchen", status_code=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?today=true&pending=true&category=fruits"""
        me = self.current_user(request)
        orders = self.services.orders
        params = request.query_params

        if me.role == UserRole.KITCHEN:
            result = orders.get_orders_by_kitchen(me.id)
        elif me.role == UserRole.SUPPLIER:
            if params.get("pending") == "true":
                result = orders.get_pending_orders_for_supplier(me.id)
            else:
                result = orders.get_orders_by_supplier(me.id)
        elif me.role == UserRole.VENDOR:
            result = orders.get_orders_by_vendor(me.id, params.get("category"))
        elif me.role == UserRole.TRANSPORTER:
            result = orders.get_orders_by_transporter(me.id)
        else:
            result = orders.list_orders()

        if params.get("today") == "true":
            todays = {order.id for order in orders.get_todays_orders()}
            result = [order for order in result if order.id in todays]
        return list_response(result)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        return entity_response(self.services.orders.get_order(pk), "Order")

    # ------------------------------------------------------------------
    # Supplier actions
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def accept(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/accept/ (supplier)

        Accepts the order and routes each category to the first eligible
        vendor; ``unassigned`` lists categories nobody could take.
        """
        supplier = self.require_role(request, UserRole.SUPPLIER)
        result = self.services.orders.accept_order(pk, supplier.id)
        return entity_response(result, "Order")

    @action(detail=True, methods=["post"], url_path="assign-vendor")
    @translate_domain_errors
    def assign_vendor(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/assign-vendor/ (supplier)"""
        supplier = self.require_role(request, UserRole.SUPPLIER)
        serializer = AssignVendorSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        orders = self.services.orders
        if orders.get_order(pk) is None:
            return entity_response(None, "Order")
        items = orders.assign_vendor(pk, data["category"], data["vendor_id"], supplier.id)
        return Response(
            {"assigned": bool(items), "items": serialize(items)},
            status=status.HTTP_200_OK if items else status.HTTP_400_BAD_REQUEST,
        )

    @action(detail=False, methods=["get"], url_path="eligible-vendors")
    @translate_domain_errors
    def eligible_vendors(self, request: Request) -> Response:
        """GET /api/v1/orders/eligible-vendors/?category=meat (supplier)"""
        supplier = self.require_role(request, UserRole.SUPPLIER)
        category = request.query_params.get("category", "")
        return list_response(self.services.orders.eligible_vendors(category, supplier.id))

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], url_path="status")
    @translate_domain_errors
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/status/"""
        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self.services.orders.update_status(
            pk,
            serializer.validated_data["status"],
            self.current_user(request).id,
            serializer.validated_data["notes"],
        )
        return entity_response(order, "Order")

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/"""
        serializer = CancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self.services.orders.cancel_order(
            pk, self.current_user(request).id, serializer.validated_data["notes"]
        )
        return entity_response(order, "Order")

    @action(detail=True, methods=["get"])
    def ride(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/ride/"""
        return entity_response(self.services.delivery.get_ride_by_order(pk), "Ride")

    @action(detail=True, methods=["get"])
    def invoices(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/invoices/"""
        return list_response(self.services.invoicing.get_invoices_by_order(pk))
