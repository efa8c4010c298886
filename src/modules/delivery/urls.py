"""Delivery URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.delivery.views import RideViewSet

router = DefaultRouter(trailing_slash=True)
router.register("rides", RideViewSet, basename="ride")

urlpatterns = router.urls
