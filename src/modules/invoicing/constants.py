"""Invoicing constants."""

from decimal import Decimal

from django.db import models


class InvoiceStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SENT = "sent", "Sent"
    PAID = "paid", "Paid"


INVOICE_TRANSITIONS: dict[str, set[str]] = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.PAID},
    InvoiceStatus.SENT: {InvoiceStatus.PAID},
    InvoiceStatus.PAID: set(),
}

TAX_RATE = Decimal("0.18")

INVOICE_NUMBER_PREFIX = "INV"
DEFAULT_DUE_DAYS = 30

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30
