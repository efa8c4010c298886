"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised when a kitchen places an order."""

    order_number: str
    kitchen_id: UUID
    kitchen_name: str


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised after every committed status transition."""

    order_number: str
    kitchen_id: UUID
    old_status: Optional[str]
    new_status: str
    actor_id: Optional[UUID] = None


@dataclass(frozen=True, kw_only=True)
class VendorAssigned(DomainEvent):
    """Raised when the items of one category are routed to a vendor."""

    order_number: str
    vendor_id: UUID
    category: str
