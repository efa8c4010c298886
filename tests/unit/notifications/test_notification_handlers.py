"""Unit tests for the event handlers that fan out notifications."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.accounts.constants import UserRole
from modules.delivery.events import RideRequested
from modules.invoicing.events import InvoiceGenerated
from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged

pytestmark = pytest.mark.unit


def _titles(container, user):
    return [n.title for n in container.notifications.get_notifications_by_user(user.id)]


class TestOrderCreatedHandler:
    def test_only_agreed_active_suppliers(self, container, kitchen, supplier, register):
        idle = register(UserRole.SUPPLIER, "idle@example.com")
        inactive = register(UserRole.SUPPLIER, "inactive@example.com")
        for partner in (supplier, inactive):
            container.accounts.establish_agreement(kitchen.id, partner.unique_id)
        container.accounts.set_active(inactive.id, False)

        container.bus.publish(
            OrderCreated(
                aggregate_id=uuid4(),
                order_number="ORD123123123",
                kitchen_id=kitchen.id,
                kitchen_name=kitchen.name,
            )
        )

        assert _titles(container, supplier) == ["New Order Available"]
        assert _titles(container, idle) == []
        assert _titles(container, inactive) == []

    def test_unknown_kitchen_is_ignored(self, container, supplier):
        container.bus.publish(
            OrderCreated(
                aggregate_id=uuid4(),
                order_number="ORD123123123",
                kitchen_id=uuid4(),
                kitchen_name="Ghost",
            )
        )
        assert _titles(container, supplier) == []


class TestOrderStatusChangedHandler:
    def _publish(self, container, kitchen, status):
        container.bus.publish(
            OrderStatusChanged(
                aggregate_id=uuid4(),
                order_number="ORD555000111",
                kitchen_id=kitchen.id,
                old_status=None,
                new_status=status,
            )
        )

    @pytest.mark.parametrize(
        "status, title",
        [
            (OrderStatus.VENDOR_ASSIGNED, "Vendor Assigned"),
            (OrderStatus.PACKED_READY, "Order Ready for Pickup"),
            (OrderStatus.IN_TRANSIT, "Order In Transit"),
            (OrderStatus.DELIVERED, "Order Delivered"),
            (OrderStatus.COMPLETED, "Order Completed"),
        ],
    )
    def test_kitchen_gets_status_notice(self, container, kitchen, status, title):
        self._publish(container, kitchen, status)
        notice = container.notifications.get_notifications_by_user(kitchen.id)[0]
        assert notice.title == title
        assert "ORD555000111" in notice.message

    def test_other_statuses_are_silent(self, container, kitchen):
        self._publish(container, kitchen, OrderStatus.PACKING)
        self._publish(container, kitchen, OrderStatus.CANCELLED)
        assert _titles(container, kitchen) == []


def test_ride_request_reaches_every_active_transporter(container, transporter, register):
    second = register(UserRole.TRANSPORTER, "second@example.com")
    off_duty = register(UserRole.TRANSPORTER, "off@example.com")
    container.accounts.set_active(off_duty.id, False)

    container.bus.publish(RideRequested(aggregate_id=uuid4(), order_id=uuid4()))

    assert _titles(container, transporter) == ["New Delivery Request"]
    assert _titles(container, second) == ["New Delivery Request"]
    assert _titles(container, off_duty) == []


def test_invoice_notice_goes_to_recipient(container, supplier):
    container.bus.publish(
        InvoiceGenerated(
            aggregate_id=uuid4(),
            invoice_number="INV000111222",
            order_id=uuid4(),
            order_number="ORD000111222",
            user_id=supplier.id,
        )
    )
    notice = container.notifications.get_notifications_by_user(supplier.id)[0]
    assert notice.message == "Invoice #INV000111222 has been generated for your order"
