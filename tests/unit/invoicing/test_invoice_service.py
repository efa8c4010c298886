"""Unit tests for InvoiceService."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from freezegun import freeze_time

from modules.accounts.constants import UserRole
from modules.invoicing.constants import InvoiceStatus
from modules.invoicing.exceptions import InvalidInvoiceStatus

pytestmark = pytest.mark.unit


@pytest.fixture()
def order(container, kitchen, supplier, place_order):
    order = place_order()
    container.orders.assign_supplier(order.id, supplier.id)
    return order


class TestGenerateForOrder:
    def test_one_invoice_per_party(self, container, kitchen, supplier, order):
        invoices = container.invoicing.generate_for_order(order)
        assert [(i.user_id, i.user_role) for i in invoices] == [
            (kitchen.id, UserRole.KITCHEN),
            (supplier.id, UserRole.SUPPLIER),
        ]

    def test_amounts_use_flat_tax(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        assert invoice.subtotal == Decimal("140")
        assert invoice.tax == Decimal("25.20")
        assert invoice.total == Decimal("165.20")
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.invoice_number.startswith("INV")

    def test_due_date_defaults_to_thirty_days(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        assert invoice.due_date - invoice.created_at == timedelta(days=30)

    def test_is_idempotent(self, container, order):
        container.invoicing.generate_for_order(order)
        assert container.invoicing.generate_for_order(order) == []
        assert len(container.invoicing.get_invoices_by_order(order.id)) == 2

    def test_order_without_supplier_bills_kitchen_only(self, container, kitchen, place_order):
        invoices = container.invoicing.generate_for_order(place_order())
        assert [i.user_id for i in invoices] == [kitchen.id]

    def test_items_are_copied(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        order.items[0].vendor_name = "changed later"
        assert invoice.items[0].vendor_name != "changed later"

    def test_recipient_is_notified(self, container, kitchen, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        notice = container.notifications.get_notifications_by_user(kitchen.id)[0]
        assert notice.title == "New Invoice Generated"
        assert invoice.invoice_number in notice.message


class TestBillingStatus:
    def test_sent_then_paid(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        sent = container.invoicing.mark_sent(invoice.id)
        assert sent.status == InvoiceStatus.SENT and sent.sent_at is not None
        paid = container.invoicing.mark_paid(invoice.id)
        assert paid.status == InvoiceStatus.PAID and paid.paid_at is not None

    def test_draft_may_be_paid_directly(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        assert container.invoicing.mark_paid(invoice.id).status == InvoiceStatus.PAID

    def test_paid_is_final(self, container, order):
        invoice = container.invoicing.generate_for_order(order)[0]
        container.invoicing.mark_paid(invoice.id)
        with pytest.raises(InvalidInvoiceStatus):
            container.invoicing.mark_sent(invoice.id)

    def test_unknown_invoice_is_none(self, container):
        assert container.invoicing.mark_paid("missing") is None


class TestStats:
    def test_weekly_and_monthly_windows(self, container, kitchen, supplier, place_order):
        def complete_at(moment):
            with freeze_time(moment):
                order = place_order()
                container.orders.assign_supplier(order.id, supplier.id)
                container.invoicing.generate_for_order(order)

        complete_at("2026-03-30 12:00:00")
        complete_at("2026-03-12 12:00:00")
        complete_at("2026-01-01 12:00:00")

        now = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)
        weekly = container.invoicing.get_weekly_stats(kitchen.id, now)
        monthly = container.invoicing.get_monthly_stats(kitchen.id, now)

        assert (weekly.count, weekly.total) == (1, Decimal("165.20"))
        assert (monthly.count, monthly.total) == (2, Decimal("330.40"))

    def test_no_invoices(self, container, kitchen):
        stats = container.invoicing.get_weekly_stats(kitchen.id)
        assert (stats.count, stats.total) == (0, Decimal("0"))
