"""Notification model."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from modules.core.models import BaseEntity
from modules.notifications.constants import NotificationType


class Notification(BaseEntity):
    user_id: UUID
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    is_read: bool = False
    action_url: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.type}] {self.title}"
