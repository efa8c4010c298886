"""Contracts between event publishers and the modules reacting to them.

Services publish only after releasing their locks; handlers may therefore
call back into any service without deadlocking.
"""

from __future__ import annotations

from typing import Generic, Iterable, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    """Reacts to one event class.

    Runs synchronously inside ``publish``; whatever it raises reaches the
    publisher.
    """

    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def publish(self, event: DomainEvent) -> None: ...

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        """Publish *events* in order."""
        ...

    def handler_count(self, event_class: Type[DomainEvent]) -> int: ...
