"""Domain events for the Invoicing bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class InvoiceGenerated(DomainEvent):
    """Raised for each invoice issued on order completion."""

    invoice_number: str
    order_id: UUID
    order_number: Optional[str]
    user_id: UUID
