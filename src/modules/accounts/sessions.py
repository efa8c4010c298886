"""Login sessions.

Sessions are process-local: they are never written to the snapshot and are
rebuilt by logging in again after a restart.
"""

from __future__ import annotations

import secrets
import threading
from typing import Dict, Optional
from uuid import UUID

from modules.accounts.constants import SESSION_TOKEN_BYTES


class SessionRegistry:
    """Maps opaque session tokens to user ids."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: Dict[str, UUID] = {}

    def open(self, user_id: UUID) -> str:
        token = secrets.token_urlsafe(SESSION_TOKEN_BYTES)
        with self._lock:
            self._sessions[token] = user_id
        return token

    def resolve(self, token: str) -> Optional[UUID]:
        with self._lock:
            return self._sessions.get(token)

    def close(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
