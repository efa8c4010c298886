"""Order repository interface.

Extends ``IRepository[Order]`` with the look-ups each party's view of
the order book needs.  The Service Layer depends exclusively on this
contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.constants import OrderStatus
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        """Retrieve an order by its human-readable number."""

    @abstractmethod
    def list_by_kitchen(self, kitchen_id: UUID) -> List[Order]:
        """Orders placed by a kitchen."""

    @abstractmethod
    def list_by_supplier(self, supplier_id: UUID) -> List[Order]:
        """Orders accepted by a supplier."""

    @abstractmethod
    def list_by_vendor(self, vendor_id: UUID, category: Optional[str] = None) -> List[Order]:
        """Orders with at least one item (of *category*, if given) routed to a vendor."""

    @abstractmethod
    def list_by_transporter(self, transporter_id: UUID) -> List[Order]:
        """Orders whose ride a transporter accepted."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> List[Order]:
        """Orders currently in *status*."""
