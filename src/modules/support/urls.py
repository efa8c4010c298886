"""Support URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.support.views import TicketViewSet

router = DefaultRouter(trailing_slash=True)
router.register("tickets", TicketViewSet, basename="ticket")

urlpatterns = router.urls
