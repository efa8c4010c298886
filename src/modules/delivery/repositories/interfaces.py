"""Delivery ride repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.delivery.models import DeliveryRide


class IRideRepository(IRepository["DeliveryRide"]):
    """Repository contract for delivery rides."""

    @abstractmethod
    def get_by_order(self, order_id: UUID) -> Optional[DeliveryRide]:
        """The ride of an order, if one was created."""

    @abstractmethod
    def list_available(self) -> List[DeliveryRide]:
        """Unclaimed rides, oldest first."""

    @abstractmethod
    def list_by_transporter(self, transporter_id: UUID) -> List[DeliveryRide]:
        """Rides claimed by a transporter, newest first."""
