"""Event handlers turning domain events into user notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.accounts.constants import UserRole
from modules.delivery.events import RideRequested
from modules.invoicing.events import InvoiceGenerated
from modules.notifications.constants import (
    INVOICE_MESSAGE,
    INVOICE_TITLE,
    NEW_ORDER_MESSAGE,
    NEW_ORDER_TITLE,
    RIDE_REQUEST_MESSAGE,
    RIDE_REQUEST_TITLE,
    STATUS_NOTIFICATIONS,
    VENDOR_ASSIGNMENT_MESSAGE,
    VENDOR_ASSIGNMENT_TITLE,
    NotificationType,
)
from modules.orders.events import OrderCreated, OrderStatusChanged, VendorAssigned
from shared.domain.bus import IEventHandler

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.notifications.services import NotificationService
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    """Tells every supplier agreed with the kitchen that a new order is up."""

    def __init__(self, notifications: NotificationService, users: IUserRepository) -> None:
        self._notifications = notifications
        self._users = users

    def handle(self, event: OrderCreated) -> None:
        kitchen = self._users.get_by_id(event.kitchen_id)
        if kitchen is None:
            logger.warning("notification.kitchen_not_found", order_id=str(event.aggregate_id))
            return

        suppliers = [
            supplier
            for supplier in self._users.list_by_role(UserRole.SUPPLIER, active_only=True)
            if supplier.is_agreed_with(kitchen)
        ]
        for supplier in suppliers:
            self._notifications.notify(
                supplier.id,
                NEW_ORDER_TITLE,
                NEW_ORDER_MESSAGE.format(number=event.order_number, kitchen=event.kitchen_name),
                NotificationType.INFO,
            )
        logger.info(
            "notification.suppliers_alerted",
            order_id=str(event.aggregate_id),
            count=len(suppliers),
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    """Sends the fixed per-status notice to the kitchen."""

    def __init__(self, notifications: NotificationService) -> None:
        self._notifications = notifications

    def handle(self, event: OrderStatusChanged) -> None:
        notice = STATUS_NOTIFICATIONS.get(event.new_status)
        if notice is None:
            return
        self._notifications.notify(
            event.kitchen_id,
            notice.title,
            notice.message.format(number=event.order_number),
            notice.type,
        )


class VendorAssignedHandler(IEventHandler[VendorAssigned]):
    def __init__(self, notifications: NotificationService) -> None:
        self._notifications = notifications

    def handle(self, event: VendorAssigned) -> None:
        self._notifications.notify(
            event.vendor_id,
            VENDOR_ASSIGNMENT_TITLE,
            VENDOR_ASSIGNMENT_MESSAGE.format(category=event.category, number=event.order_number),
            NotificationType.INFO,
        )


class RideRequestedHandler(IEventHandler[RideRequested]):
    """Broadcasts a new pickup to every active transporter."""

    def __init__(self, notifications: NotificationService, users: IUserRepository) -> None:
        self._notifications = notifications
        self._users = users

    def handle(self, event: RideRequested) -> None:
        for transporter in self._users.list_by_role(UserRole.TRANSPORTER, active_only=True):
            self._notifications.notify(
                transporter.id,
                RIDE_REQUEST_TITLE,
                RIDE_REQUEST_MESSAGE,
                NotificationType.INFO,
            )


class InvoiceGeneratedHandler(IEventHandler[InvoiceGenerated]):
    def __init__(self, notifications: NotificationService) -> None:
        self._notifications = notifications

    def handle(self, event: InvoiceGenerated) -> None:
        self._notifications.notify(
            event.user_id,
            INVOICE_TITLE,
            INVOICE_MESSAGE.format(number=event.invoice_number),
            NotificationType.INFO,
        )


def register_notification_handlers(
    bus: IEventBus, notifications: NotificationService, users: IUserRepository
) -> None:
    bus.subscribe(OrderCreated, OrderCreatedHandler(notifications, users))
    bus.subscribe(OrderStatusChanged, OrderStatusChangedHandler(notifications))
    bus.subscribe(VendorAssigned, VendorAssignedHandler(notifications))
    bus.subscribe(RideRequested, RideRequestedHandler(notifications, users))
    bus.subscribe(InvoiceGenerated, InvoiceGeneratedHandler(notifications))
