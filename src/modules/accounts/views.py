"""Identity API views.

Exposes ``AccountService`` via HTTP using DRF ViewSets.  Registration,
login and agreement failures come back as ``{success, message}`` with
status 400; business-rule exceptions are translated to 409.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.constants import UserRole
from modules.accounts.dtos import (
    RegisterUserDTO,
    SubmitVerificationDTO,
    UpdateInventoryDTO,
    UpdateProfileDTO,
)
from modules.accounts.serializers import (
    ActivationSerializer,
    AgreementSerializer,
    InventorySerializer,
    LoginSerializer,
    RegisterSerializer,
    ReviewVerificationSerializer,
    SubmitVerificationSerializer,
    UpdateProfileSerializer,
)
from modules.core.api import (
    ContainerMixin,
    entity_response,
    list_response,
    not_found,
    result_response,
    serialize,
    translate_domain_errors,
)


class AuthViewSet(ContainerMixin, ViewSet):
    """Registration and session endpoints under ``/api/v1/auth/``."""

    def get_permissions(self):
        if self.action in {"register", "login"}:
            return [AllowAny()]
        return super().get_permissions()

    @action(detail=False, methods=["post"])
    @translate_domain_errors
    def register(self, request: Request) -> Response:
        """POST /api/v1/auth/register/"""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.services.accounts.register(RegisterUserDTO(**serializer.validated_data))
        return result_response(result, success_status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def login(self, request: Request) -> Response:
        """POST /api/v1/auth/login/"""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.services.accounts.login(**serializer.validated_data)
        return result_response(result)

    @action(detail=False, methods=["post"])
    def logout(self, request: Request) -> Response:
        """POST /api/v1/auth/logout/"""
        self.services.accounts.logout(request.auth)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def me(self, request: Request) -> Response:
        """GET /api/v1/auth/me/"""
        return Response(serialize(self.current_user(request)))


class UserViewSet(ContainerMixin, ViewSet):
    """Profiles, agreements and role-specific extensions under ``/api/v1/users/``."""

    def list(self, request: Request) -> Response:
        """GET /api/v1/users/?role=vendor (admin)"""
        self.require_role(request, UserRole.ADMIN)
        role = request.query_params.get("role")
        accounts = self.services.accounts
        try:
            users = accounts.get_users_by_role(role) if role else accounts.list_users()
        except ValueError:
            return Response({"detail": f"Unknown role {role}."}, status=status.HTTP_400_BAD_REQUEST)
        return list_response(users)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        return entity_response(self.services.accounts.get_user(pk), "User")

    @translate_domain_errors
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/users/{pk}/ (self or admin)"""
        self._require_self_or_admin(request, pk)
        serializer = UpdateProfileSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = self.services.accounts.update_profile(
            pk, UpdateProfileDTO(**serializer.validated_data)
        )
        return entity_response(user, "User")

    @action(detail=False, methods=["get", "post"])
    def agreements(self, request: Request) -> Response:
        """GET/POST /api/v1/users/agreements/

        GET lists the caller's partners; POST establishes a new agreement.
        """
        me = self.current_user(request)
        if request.method == "GET":
            return list_response(self.services.accounts.get_agreed_users(me.id))

        serializer = AgreementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.services.accounts.establish_agreement(
            me.id, serializer.validated_data["target"]
        )
        return result_response(result, success_status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["put"])
    @translate_domain_errors
    def inventory(self, request: Request) -> Response:
        """PUT /api/v1/users/inventory/ (vendor)"""
        me = self.require_role(request, UserRole.VENDOR)
        serializer = InventorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.services.accounts.update_vendor_inventory(
            me.id, UpdateInventoryDTO(**serializer.validated_data)
        )
        return entity_response(user, "User")

    @action(detail=False, methods=["post"])
    @translate_domain_errors
    def verification(self, request: Request) -> Response:
        """POST /api/v1/users/verification/ (transporter)"""
        me = self.require_role(request, UserRole.TRANSPORTER)
        serializer = SubmitVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.services.accounts.submit_verification(
            me.id, SubmitVerificationDTO(**serializer.validated_data)
        )
        return entity_response(user, "User")

    @action(detail=False, methods=["get"], url_path="pending-verifications")
    def pending_verifications(self, request: Request) -> Response:
        """GET /api/v1/users/pending-verifications/ (admin)"""
        self.require_role(request, UserRole.ADMIN)
        return list_response(self.services.accounts.get_pending_verifications())

    @action(detail=True, methods=["post"])
    @translate_domain_errors
    def review(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/users/{pk}/review/ (admin)"""
        self.require_role(request, UserRole.ADMIN)
        serializer = ReviewVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.services.accounts.review_verification(
            pk,
            serializer.validated_data["approved"],
            serializer.validated_data.get("reason"),
        )
        return entity_response(user, "User")

    @action(detail=True, methods=["post"])
    def activation(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/users/{pk}/activation/ (admin)"""
        self.require_role(request, UserRole.ADMIN)
        serializer = ActivationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.services.accounts.set_active(pk, serializer.validated_data["active"])
        return entity_response(user, "User")

    @action(detail=True, methods=["get"])
    def listings(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/listings/ (a vendor's in-stock inventory)"""
        if self.services.accounts.get_user(pk) is None:
            return not_found("User")
        return list_response(self.services.catalog.get_vendor_listings(pk))

    def _require_self_or_admin(self, request: Request, pk: str | None) -> None:
        me = self.current_user(request)
        if me.role != UserRole.ADMIN and str(me.id) != str(pk):
            raise PermissionDenied("You can only edit your own profile.")
