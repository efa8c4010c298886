"""Invoicing domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class InvalidInvoiceStatus(DomainError):
    """Invoices only move forward: draft, sent, paid."""
