"""Unit tests for container wiring and lifecycle."""

from __future__ import annotations

import pytest

from modules.core.container import build_container
from modules.core.seed import DEMO_USERS, seed_demo_users
from modules.delivery.events import RideRequested, RideStatusChanged
from modules.orders.events import OrderCreated

pytestmark = pytest.mark.unit


class TestServiceContainer:
    def test_start_seeds_demo_users_when_empty(self):
        services = build_container()
        services.start()
        assert services.state.counts()["users"] == len(DEMO_USERS)
        login = services.accounts.login("admin@supplychain.com", "admin123")
        assert login.success

    def test_start_without_seeding_stays_empty(self):
        services = build_container()
        services.start(seed_demo_data=False)
        assert services.state.is_empty()

    def test_seeding_twice_creates_nothing(self):
        services = build_container()
        services.start()
        assert seed_demo_users(services.accounts) == 0

    def test_handlers_are_wired(self):
        bus = build_container().bus
        assert bus.handler_count(OrderCreated) == 1
        assert bus.handler_count(RideRequested) == 1
        assert bus.handler_count(RideStatusChanged) == 1

    def test_snapshot_survives_restart(self, tmp_path):
        path = tmp_path / "snapshot.json"
        with build_container(snapshot_path=path) as first:
            first.start()

        second = build_container(snapshot_path=path)
        second.start()
        assert second.state.counts()["users"] == len(DEMO_USERS)
        assert second.accounts.login("vendor@supplychain.com", "vendor123").success

    def test_close_drops_sessions(self):
        services = build_container()
        services.start()
        token = services.accounts.login("admin@supplychain.com", "admin123").data["token"]
        services.close()
        assert services.accounts.current_user(token) is None
