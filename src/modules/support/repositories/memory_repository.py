"""In-memory implementation of the support ticket repository."""

from __future__ import annotations

from typing import List
from uuid import UUID

from modules.core.repositories.memory import InMemoryRepository
from modules.support.models import SupportTicket
from modules.support.repositories.interfaces import ITicketRepository


class TicketMemoryRepository(InMemoryRepository[SupportTicket], ITicketRepository):
    collection_name = "tickets"

    def list_by_user(self, user_id: UUID) -> List[SupportTicket]:
        tickets = self.filter(lambda ticket: ticket.user_id == user_id)
        return sorted(tickets, key=lambda ticket: ticket.created_at, reverse=True)

    def list_newest_first(self) -> List[SupportTicket]:
        return sorted(self.list(), key=lambda ticket: ticket.created_at, reverse=True)
