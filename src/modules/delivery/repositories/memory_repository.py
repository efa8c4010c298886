"""In-memory implementation of the ride repository."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from modules.core.repositories.memory import InMemoryRepository
from modules.delivery.models import DeliveryRide
from modules.delivery.repositories.interfaces import IRideRepository


class RideMemoryRepository(InMemoryRepository[DeliveryRide], IRideRepository):
    collection_name = "rides"

    def get_by_order(self, order_id: UUID) -> Optional[DeliveryRide]:
        matches = self.filter(lambda ride: ride.order_id == order_id)
        return matches[0] if matches else None

    def list_available(self) -> List[DeliveryRide]:
        rides = self.filter(lambda ride: ride.is_available)
        return sorted(rides, key=lambda ride: ride.created_at)

    def list_by_transporter(self, transporter_id: UUID) -> List[DeliveryRide]:
        rides = self.filter(lambda ride: ride.transporter_id == transporter_id)
        return sorted(rides, key=lambda ride: ride.created_at, reverse=True)
