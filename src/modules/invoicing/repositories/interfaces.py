"""Invoice repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.invoicing.models import Invoice


class IInvoiceRepository(IRepository["Invoice"]):
    """Repository contract for invoices."""

    @abstractmethod
    def get_by_order_and_user(self, order_id: UUID, user_id: UUID) -> Optional[Invoice]:
        """The invoice issued to *user_id* for *order_id*, if any."""

    @abstractmethod
    def list_by_order(self, order_id: UUID) -> List[Invoice]:
        """Invoices issued for an order."""

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> List[Invoice]:
        """Invoices addressed to a user, newest first."""
