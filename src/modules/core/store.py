"""In-process application state, per-key locking and snapshot persistence.

``AppState`` is the single owner of every entity collection.  It is created
by the service container and handed to each repository explicitly; nothing
in the domain reaches for a module-level store.

Concurrency model: every mutation that must be serialised per entity takes
the re-entrant lock returned by ``KeyedLockRegistry`` for that key (an order
id, a ride id, or the unordered pair of users for agreements).  Re-entrancy
lets a handler running inside a locked transition (e.g. a ride status change
mirrored back into its order) take the same lock again on the same thread.

``AppState.mutex`` guards the collections themselves: repositories insert
under it and snapshots serialise under it, so a flush never iterates a
collection that another thread is growing.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple, Type
from uuid import UUID

import structlog

from modules.core.exceptions import SnapshotError
from modules.core.models import BaseEntity

logger = structlog.get_logger(__name__)

SNAPSHOT_COLLECTIONS: Tuple[str, ...] = (
    "users",
    "orders",
    "invoices",
    "rides",
    "notifications",
    "tickets",
)


class KeyedLockRegistry:
    """Hands out one ``RLock`` per key, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[Hashable, ...], threading.RLock] = {}

    def lock(self, namespace: str, *key: Any) -> threading.RLock:
        full_key = (namespace, *(str(part) for part in key))
        with self._guard:
            lock = self._locks.get(full_key)
            if lock is None:
                lock = threading.RLock()
                self._locks[full_key] = lock
            return lock

    def pair(self, namespace: str, first: Any, second: Any) -> threading.RLock:
        """Lock keyed by an *unordered* pair, so (a, b) and (b, a) collide."""
        low, high = sorted((str(first), str(second)))
        return self.lock(namespace, low, high)

    def __len__(self) -> int:
        return len(self._locks)


class AppState:
    """Entity collections keyed by collection name, then entity id."""

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[UUID, BaseEntity]] = {
            name: {} for name in SNAPSHOT_COLLECTIONS
        }
        self.locks = KeyedLockRegistry()
        self.mutex = threading.RLock()

    def collection(self, name: str) -> Dict[UUID, BaseEntity]:
        return self.collections[name]

    def put(self, name: str, entity: BaseEntity) -> None:
        with self.mutex:
            self.collections[name][entity.id] = entity

    def counts(self) -> Dict[str, int]:
        return {name: len(items) for name, items in self.collections.items()}

    def is_empty(self) -> bool:
        return not any(self.collections.values())

    def clear(self) -> None:
        with self.mutex:
            for items in self.collections.values():
                items.clear()


class SnapshotStore:
    """JSON snapshot of ``AppState`` on disk.

    The document is a single object keyed by collection name, each holding a
    list of entities dumped with camelCase aliases.  A ``None`` path disables
    persistence entirely.
    """

    def __init__(self, path: Optional[Path | str] = None) -> None:
        self.path = Path(path) if path else None

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def load(self, state: AppState, schema: Mapping[str, Type[BaseEntity]]) -> bool:
        """Replace *state* contents with the snapshot, if one exists.

        Returns ``True`` when a snapshot was loaded.

        Raises:
            SnapshotError: the file exists but cannot be parsed.
        """
        if self.path is None or not self.path.exists():
            return False

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
            loaded: Dict[str, Dict[UUID, BaseEntity]] = {}
            for name in SNAPSHOT_COLLECTIONS:
                model = schema[name]
                entities = [model.model_validate(raw) for raw in document.get(name, [])]
                loaded[name] = {entity.id: entity for entity in entities}
        except (OSError, ValueError) as exc:
            raise SnapshotError(f"Cannot load snapshot {self.path}: {exc}") from exc

        with state.mutex:
            state.clear()
            for name, entities in loaded.items():
                state.collection(name).update(entities)

        logger.info("snapshot.loaded", path=str(self.path), **state.counts())
        return True

    def flush(self, state: AppState) -> bool:
        """Write the snapshot atomically (temp file + rename)."""
        if self.path is None:
            return False

        with state.mutex:
            document = {
                name: [entity.to_json_dict() for entity in state.collection(name).values()]
                for name in SNAPSHOT_COLLECTIONS
            }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise SnapshotError(f"Cannot write snapshot {self.path}: {exc}") from exc

        logger.info("snapshot.flushed", path=str(self.path), **state.counts())
        return True
