"""Notification repositories package."""

from modules.notifications.repositories.interfaces import INotificationRepository
from modules.notifications.repositories.memory_repository import (
    NotificationMemoryRepository,
)

__all__ = ["INotificationRepository", "NotificationMemoryRepository"]
