"""Event handlers for events the Orders domain reacts to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.delivery.events import RideStatusChanged
from shared.domain.bus import IEventHandler

if TYPE_CHECKING:
    from modules.orders.services import OrderService
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class RideStatusChangedHandler(IEventHandler[RideStatusChanged]):
    """Mirrors delivery progress into the parent order."""

    def __init__(self, orders: OrderService) -> None:
        self._orders = orders

    def handle(self, event: RideStatusChanged) -> None:
        logger.debug(
            "order.ride_event_received",
            order_id=str(event.order_id),
            ride_id=str(event.aggregate_id),
            ride_status=event.status,
        )
        self._orders.apply_ride_status(
            event.order_id,
            event.status,
            transporter_id=event.transporter_id,
            transporter_name=event.transporter_name,
        )


def register_order_handlers(bus: IEventBus, orders: OrderService) -> None:
    bus.subscribe(RideStatusChanged, RideStatusChangedHandler(orders))
