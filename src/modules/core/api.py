"""Shared helpers for the HTTP views.

Every view translates domain outcomes the same way:

* ``None`` from a service (unknown id)  -> 404
* ``DomainError`` (business rule)       -> 409
* pydantic ``ValidationError`` / bad enum values -> 400
* failed ``OperationResult``            -> 400 with ``{success, message}``
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Iterable, Optional

import structlog
from pydantic import BaseModel, ValidationError
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.request import Request
from rest_framework.response import Response

from modules.accounts.constants import UserRole
from modules.accounts.models import User
from modules.core.container import ServiceContainer, get_container
from modules.core.exceptions import DomainError
from modules.core.models import OperationResult

logger = structlog.get_logger(__name__)


class ContainerMixin:
    """Gives a view access to the process container and the caller."""

    @property
    def services(self) -> ServiceContainer:
        return get_container()

    @staticmethod
    def current_user(request: Request) -> User:
        return request.user.user

    def require_role(self, request: Request, *roles: UserRole) -> User:
        user = self.current_user(request)
        if user.role not in roles:
            raise PermissionDenied(f"Role {user.role} cannot perform this action.")
        return user


def not_found(what: str) -> Response:
    return Response({"detail": f"{what} not found."}, status=status.HTTP_404_NOT_FOUND)


def serialize(value: Any) -> Any:
    """Dump models (or lists of them) with camelCase keys."""
    if isinstance(value, BaseModel):
        if isinstance(value, User):
            return value.public_dict()
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    return value


def entity_response(
    value: Optional[Any], what: str, status_code: int = status.HTTP_200_OK
) -> Response:
    if value is None:
        return not_found(what)
    return Response(serialize(value), status=status_code)


def list_response(values: Iterable[Any]) -> Response:
    return Response(serialize(list(values)))


def result_response(
    result: OperationResult, success_status: int = status.HTTP_200_OK
) -> Response:
    code = success_status if result.success else status.HTTP_400_BAD_REQUEST
    return Response(result.to_json_dict(), status=code)


def translate_domain_errors(view: Callable[..., Response]) -> Callable[..., Response]:
    """Map service exceptions raised inside *view* to HTTP responses."""

    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Response:
        try:
            return view(*args, **kwargs)
        except ValidationError as exc:
            errors = exc.errors(
                include_url=False, include_context=False, include_input=False
            )
            return Response(
                {"detail": errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except DomainError as exc:
            logger.info("api.business_rule_violation", error=type(exc).__name__)
            return Response(
                {"detail": str(exc), "code": type(exc).__name__},
                status=status.HTTP_409_CONFLICT,
            )
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return wrapper
