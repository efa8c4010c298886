"""Support ticket API views."""

from __future__ import annotations

from typing import Optional

from rest_framework import status
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
    translate_domain_errors,
)
from modules.support.dtos import CreateTicketDTO
from modules.support.models import SupportTicket
from modules.support.serializers import (
    CreateTicketSerializer,
    TicketResponseSerializer,
    TicketStatusSerializer,
)


class TicketViewSet(ContainerMixin, ViewSet):
    """Users see their own tickets; admins see and answer every ticket."""

    @translate_domain_errors
    def create(self, request: Request) -> Response:
        """POST /api/v1/tickets/"""
        me = self.current_user(request)
        serializer = CreateTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = self.services.support.create_ticket(
            CreateTicketDTO(user_id=me.id, user_name=me.name, **serializer.validated_data)
        )
        return entity_response(ticket, "Ticket", status_code=status.HTTP_201_CREATED)

    def list(self, request: Request) -> Response:
        """GET /api/v1/tickets/"""
        me = self.current_user(request)
        support = self.services.support
        if me.role == UserRole.ADMIN:
            return list_response(support.get_all_tickets())
        return list_response(support.get_tickets_by_user(me.id))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/tickets/{pk}/"""
        return entity_response(self._visible_ticket(request, pk), "Ticket")

    @action(detail=True, methods=["post"])
    def respond(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/tickets/{pk}/respond/"""
        me = self.current_user(request)
        if self._visible_ticket(request, pk) is None:
            return not_found("Ticket")
        serializer = TicketResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = self.services.support.add_response(
            pk, me.id, me.name, serializer.validated_data["message"]
        )
        return entity_response(ticket, "Ticket")

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/tickets/{pk}/status/ (admin)"""
        self.require_role(request, UserRole.ADMIN)
        serializer = TicketStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = self.services.support.update_ticket_status(
            pk, serializer.validated_data["status"]
        )
        return entity_response(ticket, "Ticket")

    def _visible_ticket(self, request: Request, pk: str | None) -> Optional[SupportTicket]:
        ticket = self.services.support.get_ticket(pk)
        me = self.current_user(request)
        if ticket is not None and me.role != UserRole.ADMIN and ticket.user_id != me.id:
            raise PermissionDenied("This ticket belongs to another user.")
        return ticket
