"""Identity URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.accounts.views import AuthViewSet, UserViewSet

router = DefaultRouter(trailing_slash=True)
router.register("auth", AuthViewSet, basename="auth")
router.register("users", UserViewSet, basename="user")

urlpatterns = router.urls
