"""Service container: builds the object graph around one ``AppState``.

The container owns the state, the event bus and every service, wires the
event handlers and drives the lifecycle (``start`` loads the snapshot or
seeds demo data, ``close`` flushes the snapshot and drops sessions).
"""

from __future__ import annotations

import atexit
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Type

import structlog

from modules.accounts.models import User
from modules.accounts.repositories import UserMemoryRepository
from modules.accounts.services import AccountService
from modules.accounts.sessions import SessionRegistry
from modules.catalog.services import CatalogService
from modules.core.models import BaseEntity
from modules.core.seed import seed_demo_users
from modules.core.store import AppState, SnapshotStore
from modules.delivery.models import DeliveryRide
from modules.delivery.repositories import RideMemoryRepository
from modules.delivery.services import DeliveryService
from modules.invoicing.constants import DEFAULT_DUE_DAYS
from modules.invoicing.models import Invoice
from modules.invoicing.repositories import InvoiceMemoryRepository
from modules.invoicing.services import InvoiceService
from modules.notifications.handlers import register_notification_handlers
from modules.notifications.models import Notification
from modules.notifications.repositories import NotificationMemoryRepository
from modules.notifications.services import NotificationService
from modules.orders.handlers import register_order_handlers
from modules.orders.models import Order
from modules.orders.repositories import OrderMemoryRepository
from modules.orders.services import OrderService
from modules.support.models import SupportTicket
from modules.support.repositories import TicketMemoryRepository
from modules.support.services import SupportService
from shared.infrastructure.bus import InMemoryEventBus

logger = structlog.get_logger(__name__)

SNAPSHOT_SCHEMA: Dict[str, Type[BaseEntity]] = {
    "users": User,
    "orders": Order,
    "invoices": Invoice,
    "rides": DeliveryRide,
    "notifications": Notification,
    "tickets": SupportTicket,
}


@dataclass
class ServiceContainer:
    state: AppState
    snapshot: SnapshotStore
    bus: InMemoryEventBus
    sessions: SessionRegistry
    accounts: AccountService
    catalog: CatalogService
    orders: OrderService
    delivery: DeliveryService
    invoicing: InvoiceService
    notifications: NotificationService
    support: SupportService

    def start(self, seed_demo_data: bool = True) -> None:
        """Load the snapshot if there is one, else optionally seed demo users."""
        loaded = self.snapshot.load(self.state, SNAPSHOT_SCHEMA)
        if not loaded and seed_demo_data and self.state.is_empty():
            seed_demo_users(self.accounts)
        logger.info("container.started", snapshot_loaded=loaded, **self.state.counts())

    def flush(self) -> bool:
        return self.snapshot.flush(self.state)

    def close(self) -> None:
        self.flush()
        self.sessions.clear()
        logger.info("container.closed")

    def __enter__(self) -> ServiceContainer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_container(
    snapshot_path: Optional[Path | str] = None,
    due_days: int = DEFAULT_DUE_DAYS,
) -> ServiceContainer:
    state = AppState()
    locks = state.locks
    bus = InMemoryEventBus()
    sessions = SessionRegistry()

    users = UserMemoryRepository(state)
    accounts = AccountService(users, sessions, locks)
    notifications = NotificationService(NotificationMemoryRepository(state), locks)
    delivery = DeliveryService(RideMemoryRepository(state), users, bus, locks)
    invoicing = InvoiceService(InvoiceMemoryRepository(state), bus, locks, due_days=due_days)
    orders = OrderService(OrderMemoryRepository(state), users, delivery, invoicing, bus, locks)

    register_notification_handlers(bus, notifications, users)
    register_order_handlers(bus, orders)

    return ServiceContainer(
        state=state,
        snapshot=SnapshotStore(snapshot_path),
        bus=bus,
        sessions=sessions,
        accounts=accounts,
        catalog=CatalogService(users),
        orders=orders,
        delivery=delivery,
        invoicing=invoicing,
        notifications=notifications,
        support=SupportService(TicketMemoryRepository(state), locks),
    )


# ---------------------------------------------------------------------------
# Process-wide container used by the HTTP layer
# ---------------------------------------------------------------------------

_container: Optional[ServiceContainer] = None
_container_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """Return the HTTP layer's container, building it from settings on first use."""
    global _container
    with _container_lock:
        if _container is None:
            from django.conf import settings

            container = build_container(
                snapshot_path=settings.SNAPSHOT_PATH or None,
                due_days=settings.INVOICE_DUE_DAYS,
            )
            container.start(seed_demo_data=settings.SEED_DEMO_DATA)
            atexit.register(container.close)
            _container = container
        return _container


def set_container(container: Optional[ServiceContainer]) -> None:
    """Install *container* for the HTTP layer (``None`` rebuilds on next use)."""
    global _container
    with _container_lock:
        _container = container
