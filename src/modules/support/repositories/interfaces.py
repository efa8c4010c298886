"""Support ticket repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.support.models import SupportTicket


class ITicketRepository(IRepository["SupportTicket"]):
    """Repository contract for support tickets."""

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> List[SupportTicket]:
        """A user's tickets, newest first."""

    @abstractmethod
    def list_newest_first(self) -> List[SupportTicket]:
        """Every ticket, newest first."""
