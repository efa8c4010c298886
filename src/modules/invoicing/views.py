"""Invoicing API views."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.constants import UserRole
from modules.core.api import (
    ContainerMixin,
    entity_response,
    list_response,
    not_found,
    serialize,
    translate_domain_errors,
)


class InvoiceViewSet(ContainerMixin, ViewSet):
    """Invoices addressed to the caller (admins may pass ``?user=<id>``)."""

    def list(self, request: Request) -> Response:
        """GET /api/v1/invoices/"""
        return list_response(self.services.invoicing.get_invoices_by_user(self._owner(request)))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/invoices/{pk}/"""
        return entity_response(self.services.invoicing.get_invoice(pk), "Invoice")

    @action(detail=False, methods=["get"])
    def stats(self, request: Request) -> Response:
        """GET /api/v1/invoices/stats/ (trailing 7 and 30 days)"""
        owner = self._owner(request)
        invoicing = self.services.invoicing
        return Response(
            {
                "weekly": serialize(invoicing.get_weekly_stats(owner)),
                "monthly": serialize(invoicing.get_monthly_stats(owner)),
            }
        )

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def sent(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/invoices/{pk}/sent/"""
        if not self._can_manage(request, pk):
            return not_found("Invoice")
        return entity_response(self.services.invoicing.mark_sent(pk), "Invoice")

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def paid(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/invoices/{pk}/paid/"""
        if not self._can_manage(request, pk):
            return not_found("Invoice")
        return entity_response(self.services.invoicing.mark_paid(pk), "Invoice")

    def _owner(self, request: Request) -> str:
        me = self.current_user(request)
        requested = request.query_params.get("user")
        if requested and me.role == UserRole.ADMIN:
            return requested
        return str(me.id)

    def _can_manage(self, request: Request, pk: str | None) -> bool:
        invoice = self.services.invoicing.get_invoice(pk)
        if invoice is None:
            return False
        me = self.current_user(request)
        if me.role != UserRole.ADMIN and invoice.user_id != me.id:
            raise PermissionDenied("Only the invoice recipient can update it.")
        return True
