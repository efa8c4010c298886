"""In-memory repository base backed by an ``AppState`` collection."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypeVar
from uuid import UUID

from modules.core.models import BaseEntity, coerce_uuid
from modules.core.repositories.interfaces import IRepository
from modules.core.store import AppState

E = TypeVar("E", bound=BaseEntity)


class InMemoryRepository(IRepository[E]):
    """Concrete repository over one named collection of ``AppState``.

    Subclasses set ``collection_name`` and add their own query methods on
    top of ``filter``.  Returned entities are the live instances held by the
    state; callers mutate them under the appropriate entity lock and then
    ``save``.
    """

    collection_name: str = ""

    def __init__(self, state: AppState) -> None:
        self._state = state

    @property
    def _items(self) -> Dict[UUID, E]:
        return self._state.collection(self.collection_name)  # type: ignore[return-value]

    def get_by_id(self, id: UUID | str) -> Optional[E]:
        key = coerce_uuid(id)
        if key is None:
            return None
        return self._items.get(key)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[E]:
        if not filters:
            return list(self._items.values())
        return self.filter(
            lambda entity: all(getattr(entity, k) == v for k, v in filters.items())
        )

    def filter(self, predicate: Callable[[E], bool]) -> List[E]:
        return [entity for entity in list(self._items.values()) if predicate(entity)]

    def save(self, entity: E) -> E:
        self._state.put(self.collection_name, entity)
        return entity

    def count(self) -> int:
        return len(self._items)
