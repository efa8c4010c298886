"""Session-token authentication backend for Django REST Framework.

Tokens are issued by ``AccountService.login`` and live only in the
process's ``SessionRegistry``.  Clients send them as
``Authorization: Bearer <token>``.

* **Fail Closed**: a malformed header or an unknown token returns 401.
* Deactivated users are rejected even while their session is open.
"""

from __future__ import annotations

import structlog
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from modules.accounts.models import User
from modules.core.container import get_container

logger = structlog.get_logger(__name__)


class SessionUser:
    """Request user wrapping the authenticated ``User``.

    Views read ``request.user.user`` for the domain entity.
    """

    is_authenticated = True

    def __init__(self, user: User) -> None:
        self.user = user
        self.id = user.id
        self.role = user.role

    @property
    def is_active(self) -> bool:
        return self.user.is_active

    def __str__(self) -> str:  # pragma: no cover
        return str(self.user)


class SessionTokenAuthentication(BaseAuthentication):
    """DRF authentication class that resolves Bearer session tokens."""

    keyword = "Bearer"

    def authenticate(self, request):
        """Return ``(SessionUser, token)`` or ``None`` (no credentials)."""
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if not header:
            return None

        token = self._extract_token(header)
        user = get_container().accounts.current_user(token)
        if user is None:
            logger.warning("session.invalid_token")
            raise AuthenticationFailed("Invalid or expired session token.")
        if not user.is_active:
            raise AuthenticationFailed("Account is deactivated. Contact admin.")

        structlog.contextvars.bind_contextvars(user_id=str(user.id), role=str(user.role))
        return (SessionUser(user), token)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} realm="api"'

    @staticmethod
    def _extract_token(header: str) -> str:
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthenticationFailed("Invalid Authorization header format.")
        return parts[1]
