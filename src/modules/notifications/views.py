"""Notification API views (always scoped to the caller)."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.api import ContainerMixin, list_response, not_found, serialize


class NotificationViewSet(ContainerMixin, ViewSet):
    def list(self, request: Request) -> Response:
        """GET /api/v1/notifications/ (newest first)"""
        me = self.current_user(request)
        return list_response(self.services.notifications.get_notifications_by_user(me.id))

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request: Request) -> Response:
        """GET /api/v1/notifications/unread-count/"""
        me = self.current_user(request)
        return Response({"unreadCount": self.services.notifications.get_unread_count(me.id)})

    @action(detail=True, methods=["post"])
    def read(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/notifications/{pk}/read/"""
        me = self.current_user(request)
        notifications = self.services.notifications
        owned = {str(n.id) for n in notifications.get_notifications_by_user(me.id)}
        if str(pk) not in owned:
            return not_found("Notification")
        return Response(serialize(notifications.mark_as_read(pk)))

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request: Request) -> Response:
        """POST /api/v1/notifications/read-all/"""
        me = self.current_user(request)
        return Response({"updated": self.services.notifications.mark_all_as_read(me.id)})
