"""Unit tests for the in-process state, keyed locks and snapshots."""

from __future__ import annotations

import json
import threading

import pytest

from modules.accounts.constants import UserRole
from modules.core.container import SNAPSHOT_SCHEMA
from modules.core.exceptions import SnapshotError
from modules.core.store import AppState, KeyedLockRegistry, SnapshotStore

pytestmark = pytest.mark.unit


class TestKeyedLockRegistry:
    def test_same_key_returns_same_lock(self):
        locks = KeyedLockRegistry()
        assert locks.lock("order", "a") is locks.lock("order", "a")
        assert locks.lock("order", "a") is not locks.lock("order", "b")

    def test_pair_lock_ignores_argument_order(self):
        locks = KeyedLockRegistry()
        assert locks.pair("agreement", "x", "y") is locks.pair("agreement", "y", "x")

    def test_locks_are_reentrant(self):
        lock = KeyedLockRegistry().lock("order", 1)
        with lock:
            with lock:
                pass


class TestSnapshotStore:
    def test_disabled_without_path(self, container):
        store = SnapshotStore(None)
        assert store.enabled is False
        assert store.flush(container.state) is False
        assert store.load(AppState(), SNAPSHOT_SCHEMA) is False

    def test_flush_then_load_restores_entities(
        self, tmp_path, container, kitchen, place_order
    ):
        order = place_order()
        path = tmp_path / "data" / "snapshot.json"
        store = SnapshotStore(path)

        assert store.flush(container.state) is True
        document = json.loads(path.read_text())
        assert document["orders"][0]["orderNumber"] == order.order_number
        assert "kitchenId" in document["orders"][0]

        restored = AppState()
        assert store.load(restored, SNAPSHOT_SCHEMA) is True
        user = restored.collection("users")[kitchen.id]
        assert user.role == UserRole.KITCHEN
        assert restored.collection("orders")[order.id].total_amount == order.total_amount

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError):
            SnapshotStore(path).load(AppState(), SNAPSHOT_SCHEMA)

    def test_flush_while_users_register(self, tmp_path, container, register):
        store = SnapshotStore(tmp_path / "snapshot.json")
        errors = []
        done = threading.Event()

        def keep_flushing():
            try:
                while not done.is_set():
                    store.flush(container.state)
            except RuntimeError as exc:
                errors.append(exc)

        flusher = threading.Thread(target=keep_flushing)
        flusher.start()
        try:
            for i in range(200):
                register(UserRole.KITCHEN, f"k{i}@example.com")
        finally:
            done.set()
            flusher.join()

        assert errors == []
        store.flush(container.state)
        restored = AppState()
        store.load(restored, SNAPSHOT_SCHEMA)
        assert restored.counts()["users"] == 200

    def test_put_and_clear_share_the_state_mutex(self, container, kitchen):
        state = container.state
        with state.mutex:
            state.put("users", kitchen)
            assert state.collection("users")[kitchen.id] is kitchen
        state.clear()
        assert state.is_empty()
