"""Notification repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.notifications.models import Notification


class INotificationRepository(IRepository["Notification"]):
    """Repository contract for notifications."""

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> List[Notification]:
        """A user's notifications, newest first."""
