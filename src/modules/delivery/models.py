"""Delivery ride model.

One ride exists per order.  ``transporter_id`` stays empty until a
transporter claims the ride; from then on only that transporter moves it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from modules.core.models import Address, BaseEntity, Coordinates
from modules.delivery.constants import RIDE_TRANSITIONS, RideStatus


class DeliveryRide(BaseEntity):
    order_id: UUID
    order_number: Optional[str] = None
    transporter_id: Optional[UUID] = None
    transporter_name: Optional[str] = None
    pickup_address: Address = Field(default_factory=Address)
    drop_address: Address = Field(default_factory=Address)
    status: RideStatus = RideStatus.REQUESTED
    accepted_at: Optional[datetime] = None
    picked_up_at: Optional[datetime] = None
    in_transit_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    coordinates: Optional[Coordinates] = None

    @property
    def is_available(self) -> bool:
        return self.status == RideStatus.REQUESTED

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in RIDE_TRANSITIONS.get(self.status, set())

    def __str__(self) -> str:
        return f"Ride for {self.order_number or self.order_id} ({self.status})"
