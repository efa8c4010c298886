"""Invoice model and billing statistics.

Business rules implemented:
- ``tax = subtotal * TAX_RATE`` and ``total = subtotal + tax``, computed
  once at generation with ``Decimal`` arithmetic and no rounding.
- Items are a copy of the order items at completion time.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from modules.accounts.constants import UserRole
from modules.core.models import BaseEntity, CamelModel, generate_reference_number
from modules.invoicing.constants import (
    INVOICE_NUMBER_PREFIX,
    INVOICE_TRANSITIONS,
    InvoiceStatus,
)
from modules.orders.models import OrderItem


class Invoice(BaseEntity):
    invoice_number: str
    order_id: UUID
    order_number: Optional[str] = None
    user_id: UUID
    user_role: UserRole
    items: List[OrderItem]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: datetime
    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in INVOICE_TRANSITIONS.get(self.status, set())

    @staticmethod
    def generate_invoice_number() -> str:
        return generate_reference_number(INVOICE_NUMBER_PREFIX)

    def __str__(self) -> str:
        return f"{self.invoice_number} ({self.status}) {self.total}"


class InvoiceStats(CamelModel):
    total: Decimal = Decimal("0")
    count: int = 0
