"""Order aggregate: Order, OrderItem and StatusHistoryEntry.

Business rules implemented:
- Status transitions are validated against ``VALID_TRANSITIONS``
  (enforced at service layer through ``can_transition_to``).
- Each status change appends a ``StatusHistoryEntry`` with old/new
  status, actor and notes.
- ``total_amount`` is fixed at creation: ``sum(price * quantity)``.
- ``OrderItem.price`` snapshots the catalog price; only the vendor fields
  of an item change after creation.
- ``kitchen_address`` is a copy taken when the order is placed; later
  profile edits never reach existing orders.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

import uuid6
from pydantic import Field

from modules.catalog.constants import ProductCategory
from modules.core.models import (
    Address,
    CamelModel,
    TimestampedEntity,
    generate_reference_number,
    utc_now,
)
from modules.orders.constants import (
    ORDER_NUMBER_PREFIX,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)


class OrderItem(CamelModel):
    """Line item with a price snapshot and an optional assigned vendor."""

    id: UUID = Field(default_factory=uuid6.uuid7)
    product_id: str
    product_name: str
    category: ProductCategory
    quantity: int
    unit: str
    price: Decimal
    vendor_id: Optional[UUID] = None
    vendor_name: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    @property
    def is_assigned(self) -> bool:
        return self.vendor_id is not None

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} ({self.subtotal})"


class StatusHistoryEntry(CamelModel):
    """Append-only audit record; ``actor_id`` is ``None`` for system changes."""

    old_status: Optional[OrderStatus] = None
    new_status: OrderStatus
    actor_id: Optional[UUID] = None
    notes: str = ""
    created_at: datetime = Field(default_factory=utc_now)


class Order(TimestampedEntity):
    """Order aggregate root.

    ``order_number`` is the human-readable identifier shown to every party
    (format: ``ORD`` + last 6 digits of the epoch-millis clock + 3 random
    digits).  The UUIDv7 ``id`` is used for all internal references.
    """

    order_number: str
    kitchen_id: UUID
    kitchen_name: str
    kitchen_address: Address = Field(default_factory=Address)
    supplier_id: Optional[UUID] = None
    supplier_name: Optional[str] = None
    transporter_id: Optional[UUID] = None
    transporter_name: Optional[str] = None
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.PENDING_SUPPLIER
    total_amount: Decimal
    notes: Optional[str] = None
    pickup_time: Optional[datetime] = None
    delivery_time: Optional[datetime] = None
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    def record_transition(
        self, new_status: OrderStatus, actor_id: Optional[UUID] = None, notes: str = ""
    ) -> StatusHistoryEntry:
        entry = StatusHistoryEntry(
            old_status=self.status,
            new_status=new_status,
            actor_id=actor_id,
            notes=notes,
        )
        self.status = new_status
        self.status_history.append(entry)
        self.touch()
        return entry

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    @property
    def categories(self) -> List[ProductCategory]:
        """Distinct item categories, in first-seen order."""
        seen: List[ProductCategory] = []
        for item in self.items:
            if item.category not in seen:
                seen.append(item.category)
        return seen

    def items_in(self, category: ProductCategory | str) -> List[OrderItem]:
        return [item for item in self.items if item.category == category]

    def has_vendor(self, vendor_id: UUID) -> bool:
        return any(item.vendor_id == vendor_id for item in self.items)

    @staticmethod
    def compute_total(items: Iterable[OrderItem]) -> Decimal:
        return sum((item.subtotal for item in items), Decimal("0"))

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number(prefix: str = ORDER_NUMBER_PREFIX) -> str:
        """Generate a human-readable number: ``ORD`` + 6 clock digits + 3 random."""
        return generate_reference_number(prefix)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"
