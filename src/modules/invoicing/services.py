"""Invoicing service (Use Cases).

Issues invoices when an order completes and keeps the manual billing
bookkeeping (sent / paid).  No payment is processed here.

Business rules enforced here:
- One invoice per (order, party): the kitchen always, the supplier when
  one accepted the order.  Completing twice never issues a second invoice.
- ``subtotal`` is ``sum(price * quantity)``; tax is a flat 18%.
- Invoices are due ``due_days`` after issue (30 by default).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

import structlog

from modules.accounts.constants import UserRole
from modules.core.models import coerce_uuid, utc_now
from modules.invoicing.constants import (
    DEFAULT_DUE_DAYS,
    MONTHLY_WINDOW_DAYS,
    TAX_RATE,
    WEEKLY_WINDOW_DAYS,
    InvoiceStatus,
)
from modules.invoicing.events import InvoiceGenerated
from modules.invoicing.exceptions import InvalidInvoiceStatus
from modules.invoicing.models import Invoice, InvoiceStats

if TYPE_CHECKING:
    from modules.core.store import KeyedLockRegistry
    from modules.invoicing.repositories.interfaces import IInvoiceRepository
    from modules.orders.models import Order
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InvoiceService:
    """Application service for invoices."""

    def __init__(
        self,
        invoice_repository: IInvoiceRepository,
        event_bus: IEventBus,
        locks: KeyedLockRegistry,
        due_days: int = DEFAULT_DUE_DAYS,
    ) -> None:
        self._invoice_repo = invoice_repository
        self._bus = event_bus
        self._locks = locks
        self._due_days = due_days

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def generate_for_order(
        self, order: Order, outbox: Optional[List[DomainEvent]] = None
    ) -> List[Invoice]:
        """Issue the kitchen invoice and, if a supplier is set, the supplier's.

        Returns only the invoices created by this call.  ``InvoiceGenerated``
        events go to *outbox* when one is given, else straight to the bus.
        """
        recipients: List[Tuple[UUID, UserRole]] = [(order.kitchen_id, UserRole.KITCHEN)]
        if order.supplier_id is not None:
            recipients.append((order.supplier_id, UserRole.SUPPLIER))

        subtotal = sum((item.price * item.quantity for item in order.items), Decimal("0"))
        tax = subtotal * TAX_RATE
        created: List[Invoice] = []

        with self._locks.lock("order_invoices", order.id):
            for user_id, role in recipients:
                if self._invoice_repo.get_by_order_and_user(order.id, user_id):
                    logger.info(
                        "invoice.already_exists",
                        order_id=str(order.id),
                        user_id=str(user_id),
                    )
                    continue

                now = utc_now()
                invoice = Invoice(
                    invoice_number=self._new_invoice_number(),
                    order_id=order.id,
                    order_number=order.order_number,
                    user_id=user_id,
                    user_role=role,
                    items=[item.model_copy(deep=True) for item in order.items],
                    subtotal=subtotal,
                    tax=tax,
                    total=subtotal + tax,
                    created_at=now,
                    due_date=now + timedelta(days=self._due_days),
                )
                self._invoice_repo.save(invoice)
                created.append(invoice)

        events = []
        for invoice in created:
            logger.info(
                "invoice.generated",
                invoice_id=str(invoice.id),
                order_id=str(order.id),
                user_role=invoice.user_role,
                total=str(invoice.total),
            )
            events.append(
                InvoiceGenerated(
                    aggregate_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    order_id=invoice.order_id,
                    order_number=invoice.order_number,
                    user_id=invoice.user_id,
                )
            )
        if outbox is None:
            self._bus.publish_all(events)
        else:
            outbox.extend(events)
        return created

    def mark_sent(self, invoice_id: UUID | str) -> Optional[Invoice]:
        return self._move(invoice_id, InvoiceStatus.SENT)

    def mark_paid(self, invoice_id: UUID | str) -> Optional[Invoice]:
        return self._move(invoice_id, InvoiceStatus.PAID)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_invoice(self, invoice_id: UUID | str) -> Optional[Invoice]:
        return self._invoice_repo.get_by_id(invoice_id)

    def get_invoices_by_user(self, user_id: UUID | str) -> List[Invoice]:
        user_id = coerce_uuid(user_id)
        if user_id is None:
            return []
        return self._invoice_repo.list_by_user(user_id)

    def get_invoices_by_order(self, order_id: UUID | str) -> List[Invoice]:
        order_id = coerce_uuid(order_id)
        if order_id is None:
            return []
        return self._invoice_repo.list_by_order(order_id)

    def get_weekly_stats(
        self, user_id: UUID | str, now: Optional[datetime] = None
    ) -> InvoiceStats:
        return self._stats(user_id, WEEKLY_WINDOW_DAYS, now)

    def get_monthly_stats(
        self, user_id: UUID | str, now: Optional[datetime] = None
    ) -> InvoiceStats:
        return self._stats(user_id, MONTHLY_WINDOW_DAYS, now)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _stats(self, user_id: UUID | str, days: int, now: Optional[datetime]) -> InvoiceStats:
        cutoff = (now or utc_now()) - timedelta(days=days)
        invoices = [
            invoice
            for invoice in self.get_invoices_by_user(user_id)
            if invoice.created_at >= cutoff
        ]
        return InvoiceStats(
            total=sum((invoice.total for invoice in invoices), Decimal("0")),
            count=len(invoices),
        )

    def _move(self, invoice_id: UUID | str, status: InvoiceStatus) -> Optional[Invoice]:
        """Advance the invoice and stamp the matching timestamp.

        Raises:
            InvalidInvoiceStatus: the invoice cannot move to *status*.
        """
        invoice = self._invoice_repo.get_by_id(invoice_id)
        if invoice is None:
            logger.warning("invoice.not_found", invoice_id=str(invoice_id))
            return None

        log = logger.bind(invoice_id=str(invoice.id), current_status=invoice.status)

        with self._locks.lock("invoice", invoice.id):
            if not invoice.can_transition_to(status):
                log.warning("invoice.invalid_transition", new_status=status)
                raise InvalidInvoiceStatus(
                    f"Cannot move invoice from {invoice.status} to {status}."
                )
            invoice.status = status
            if status == InvoiceStatus.SENT:
                invoice.sent_at = utc_now()
            else:
                invoice.paid_at = utc_now()
            self._invoice_repo.save(invoice)

        log.info("invoice.status_updated", new_status=status)
        return invoice

    def _new_invoice_number(self) -> str:
        taken = {invoice.invoice_number for invoice in self._invoice_repo.list()}
        number = Invoice.generate_invoice_number()
        while number in taken:
            number = Invoice.generate_invoice_number()
        return number
