"""Delivery API views."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.constants import UserRole
from modules.core.api import (
    ContainerMixin,
    entity_response,
    list_response,
    translate_domain_errors,
)
from modules.delivery.serializers import LocationSerializer, RideStatusSerializer


class RideViewSet(ContainerMixin, ViewSet):
    def list(self, request: Request) -> Response:
        """GET /api/v1/rides/ (the transporter's own rides)"""
        me = self.require_role(request, UserRole.TRANSPORTER)
        return list_response(self.services.delivery.get_rides_by_transporter(me.id))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/rides/{pk}/"""
        return entity_response(self.services.delivery.get_ride(pk), "Ride")

    @action(detail=False, methods=["get"])
    def available(self, request: Request) -> Response:
        """GET /api/v1/rides/available/ (oldest first)"""
        self.require_role(request, UserRole.TRANSPORTER, UserRole.ADMIN)
        return list_response(self.services.delivery.get_available_rides())

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def accept(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/rides/{pk}/accept/"""
        me = self.require_role(request, UserRole.TRANSPORTER)
        return entity_response(self.services.delivery.accept_ride(pk, me.id), "Ride")

    @action(detail=True, methods=["post"], url_path="status")
    @translate_domain_errors
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/rides/{pk}/status/"""
        me = self.require_role(request, UserRole.TRANSPORTER)
        serializer = RideStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ride = self.services.delivery.update_ride_status(
            pk, serializer.validated_data["status"], transporter_id=me.id
        )
        return entity_response(ride, "Ride")

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def location(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/rides/{pk}/location/ (the claiming transporter)"""
        me = self.require_role(request, UserRole.TRANSPORTER)
        serializer = LocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ride = self.services.delivery.update_location(
            pk, **serializer.validated_data, transporter_id=me.id
        )
        return entity_response(ride, "Ride")
