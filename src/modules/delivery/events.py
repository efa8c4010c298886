"""Domain events for the Delivery bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class RideRequested(DomainEvent):
    """Raised when a packed order needs a pickup."""

    order_id: UUID
    order_number: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class RideStatusChanged(DomainEvent):
    """Raised after a ride is accepted or moves forward."""

    order_id: UUID
    status: str
    transporter_id: Optional[UUID] = None
    transporter_name: Optional[str] = None
