"""Notification fan-out service.

Stores per-user notices.  Unread counts are recomputed on every read;
nothing is cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog

from modules.core.models import coerce_uuid
from modules.notifications.constants import NotificationType
from modules.notifications.models import Notification

if TYPE_CHECKING:
    from modules.core.store import KeyedLockRegistry
    from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)


class NotificationService:
    def __init__(
        self,
        notification_repository: INotificationRepository,
        locks: KeyedLockRegistry,
    ) -> None:
        self._repo = notification_repository
        self._locks = locks

    def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        type: NotificationType | str = NotificationType.INFO,
        action_url: Optional[str] = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=NotificationType(type),
            action_url=action_url,
        )
        self._repo.save(notification)
        logger.info(
            "notification.created",
            notification_id=str(notification.id),
            user_id=str(user_id),
            title=title,
        )
        return notification

    def get_notifications_by_user(self, user_id: UUID | str) -> List[Notification]:
        user_id = coerce_uuid(user_id)
        if user_id is None:
            return []
        return self._repo.list_by_user(user_id)

    def get_unread_count(self, user_id: UUID | str) -> int:
        return sum(1 for n in self.get_notifications_by_user(user_id) if not n.is_read)

    def mark_as_read(self, notification_id: UUID | str) -> Optional[Notification]:
        notification = self._repo.get_by_id(notification_id)
        if notification is None:
            logger.warning("notification.not_found", notification_id=str(notification_id))
            return None
        if not notification.is_read:
            notification.is_read = True
            self._repo.save(notification)
        return notification

    def mark_all_as_read(self, user_id: UUID | str) -> int:
        """Mark every unread notice of *user_id* read; returns how many changed."""
        user_id = coerce_uuid(user_id)
        if user_id is None:
            return 0

        changed = 0
        with self._locks.lock("notifications", user_id):
            for notification in self._repo.list_by_user(user_id):
                if not notification.is_read:
                    notification.is_read = True
                    self._repo.save(notification)
                    changed += 1

        logger.info("notification.all_read", user_id=str(user_id), changed=changed)
        return changed
