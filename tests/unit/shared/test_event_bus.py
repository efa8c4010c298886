"""Unit tests for the in-memory event bus and domain events."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from modules.orders.events import OrderCreated, VendorAssigned
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class RecordingHandler:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


def _order_created(**overrides):
    data = {
        "aggregate_id": uuid4(),
        "order_number": "ORD123456789",
        "kitchen_id": uuid4(),
        "kitchen_name": "Green Kitchen",
    }
    data.update(overrides)
    return OrderCreated(**data)


class TestInMemoryEventBus:
    def test_dispatches_only_to_subscribers_of_the_event_class(self):
        bus = InMemoryEventBus()
        created, assigned = RecordingHandler(), RecordingHandler()
        bus.subscribe(OrderCreated, created)
        bus.subscribe(VendorAssigned, assigned)

        event = _order_created()
        bus.publish(event)

        assert created.events == [event]
        assert assigned.events == []

    def test_subscribing_twice_is_ignored(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(OrderCreated, handler)
        bus.subscribe(OrderCreated, handler)
        bus.publish(_order_created())
        assert len(handler.events) == 1

    def test_handler_errors_propagate(self):
        class Failing:
            def handle(self, event):
                raise RuntimeError("boom")

        bus = InMemoryEventBus()
        bus.subscribe(OrderCreated, Failing())
        with pytest.raises(RuntimeError):
            bus.publish(_order_created())


class TestDomainEvent:
    def test_event_name_and_payload(self):
        event = _order_created()
        payload = event.to_payload()
        assert event.event_name == "OrderCreated"
        assert payload["order_number"] == "ORD123456789"
        assert isinstance(payload["kitchen_id"], str)

    def test_events_are_immutable(self):
        with pytest.raises(FrozenInstanceError):
            _order_created().order_number = "changed"
