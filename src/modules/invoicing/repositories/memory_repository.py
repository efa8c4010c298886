"""In-memory implementation of the invoice repository."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from modules.core.repositories.memory import InMemoryRepository
from modules.invoicing.models import Invoice
from modules.invoicing.repositories.interfaces import IInvoiceRepository


class InvoiceMemoryRepository(InMemoryRepository[Invoice], IInvoiceRepository):
    collection_name = "invoices"

    def get_by_order_and_user(self, order_id: UUID, user_id: UUID) -> Optional[Invoice]:
        matches = self.filter(
            lambda invoice: invoice.order_id == order_id and invoice.user_id == user_id
        )
        return matches[0] if matches else None

    def list_by_order(self, order_id: UUID) -> List[Invoice]:
        return self.filter(lambda invoice: invoice.order_id == order_id)

    def list_by_user(self, user_id: UUID) -> List[Invoice]:
        invoices = self.filter(lambda invoice: invoice.user_id == user_id)
        return sorted(invoices, key=lambda invoice: invoice.created_at, reverse=True)
