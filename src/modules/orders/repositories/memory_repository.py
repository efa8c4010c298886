"""In-memory implementation of the Order repository."""

from __future__ import annotations

from typing import Callable, List, Optional
from uuid import UUID

from modules.core.repositories.memory import InMemoryRepository
from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository


class OrderMemoryRepository(InMemoryRepository[Order], IOrderRepository):
    """Concrete Order repository backed by the ``orders`` collection.

    The ``list_by_*`` methods return orders newest first.
    """

    collection_name = "orders"

    def _newest_first(self, predicate: Callable[[Order], bool]) -> List[Order]:
        return sorted(self.filter(predicate), key=lambda o: o.created_at, reverse=True)

    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        matches = self.filter(lambda order: order.order_number == order_number)
        return matches[0] if matches else None

    def list_by_kitchen(self, kitchen_id: UUID) -> List[Order]:
        return self._newest_first(lambda order: order.kitchen_id == kitchen_id)

    def list_by_supplier(self, supplier_id: UUID) -> List[Order]:
        return self._newest_first(lambda order: order.supplier_id == supplier_id)

    def list_by_vendor(self, vendor_id: UUID, category: Optional[str] = None) -> List[Order]:
        return self._newest_first(
            lambda order: any(
                item.vendor_id == vendor_id and (category is None or item.category == category)
                for item in order.items
            )
        )

    def list_by_transporter(self, transporter_id: UUID) -> List[Order]:
        return self._newest_first(lambda order: order.transporter_id == transporter_id)

    def list_by_status(self, status: OrderStatus) -> List[Order]:
        return self._newest_first(lambda order: order.status == status)
