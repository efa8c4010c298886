"""Support ticket repositories package."""

from modules.support.repositories.interfaces import ITicketRepository
from modules.support.repositories.memory_repository import TicketMemoryRepository

__all__ = ["ITicketRepository", "TicketMemoryRepository"]
