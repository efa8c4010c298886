"""In-memory implementation of the notification repository."""

from __future__ import annotations

from typing import List
from uuid import UUID

from modules.core.repositories.memory import InMemoryRepository
from modules.notifications.models import Notification
from modules.notifications.repositories.interfaces import INotificationRepository


class NotificationMemoryRepository(InMemoryRepository[Notification], INotificationRepository):
    collection_name = "notifications"

    def list_by_user(self, user_id: UUID) -> List[Notification]:
        # Reversed insertion order breaks ties between equal timestamps.
        notifications = self.filter(lambda notification: notification.user_id == user_id)
        notifications.reverse()
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)
