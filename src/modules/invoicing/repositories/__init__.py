"""Invoice repositories package."""

from modules.invoicing.repositories.interfaces import IInvoiceRepository
from modules.invoicing.repositories.memory_repository import InvoiceMemoryRepository

__all__ = ["IInvoiceRepository", "InvoiceMemoryRepository"]
