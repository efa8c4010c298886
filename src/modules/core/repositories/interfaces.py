"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on the backing store directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Order``, ``User``).  Entities are never hard-deleted,
    so the contract has no ``delete``.
    """

    @abstractmethod
    def get_by_id(self, id: UUID | str) -> Optional[T]:
        """Retrieve an entity by its identifier; ``None`` if unknown or malformed."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities whose attributes equal every value in *filters*."""

    @abstractmethod
    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        """List entities matching *predicate*, in insertion order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""
