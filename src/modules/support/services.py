"""Support ticketing service.

Unknown ticket ids are no-ops returning ``None``.  The first response on
an ``open`` ticket moves it to ``in_progress``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog

from modules.core.models import coerce_uuid
from modules.support.constants import TicketStatus
from modules.support.models import SupportTicket, TicketResponse

if TYPE_CHECKING:
    from modules.core.store import KeyedLockRegistry
    from modules.support.dtos import CreateTicketDTO
    from modules.support.repositories.interfaces import ITicketRepository

logger = structlog.get_logger(__name__)


class SupportService:
    def __init__(self, ticket_repository: ITicketRepository, locks: KeyedLockRegistry) -> None:
        self._repo = ticket_repository
        self._locks = locks

    def create_ticket(self, dto: CreateTicketDTO) -> SupportTicket:
        ticket = SupportTicket(
            user_id=dto.user_id,
            user_name=dto.user_name,
            subject=dto.subject,
            message=dto.message,
            priority=dto.priority,
        )
        self._repo.save(ticket)
        logger.info("ticket.created", ticket_id=str(ticket.id), priority=ticket.priority)
        return ticket

    def add_response(
        self, ticket_id: UUID | str, user_id: UUID, user_name: str, message: str
    ) -> Optional[SupportTicket]:
        ticket = self._repo.get_by_id(ticket_id)
        if ticket is None:
            logger.warning("ticket.not_found", ticket_id=str(ticket_id))
            return None

        with self._locks.lock("ticket", ticket.id):
            ticket.responses.append(
                TicketResponse(
                    ticket_id=ticket.id,
                    user_id=user_id,
                    user_name=user_name,
                    message=message,
                )
            )
            if ticket.status == TicketStatus.OPEN:
                ticket.status = TicketStatus.IN_PROGRESS
            ticket.touch()
            self._repo.save(ticket)

        logger.info("ticket.responded", ticket_id=str(ticket.id), status=ticket.status)
        return ticket

    def update_ticket_status(
        self, ticket_id: UUID | str, status: TicketStatus | str
    ) -> Optional[SupportTicket]:
        status = TicketStatus(status)
        ticket = self._repo.get_by_id(ticket_id)
        if ticket is None:
            logger.warning("ticket.not_found", ticket_id=str(ticket_id))
            return None

        with self._locks.lock("ticket", ticket.id):
            ticket.status = status
            ticket.touch()
            self._repo.save(ticket)

        logger.info("ticket.status_updated", ticket_id=str(ticket.id), status=status)
        return ticket

    def get_ticket(self, ticket_id: UUID | str) -> Optional[SupportTicket]:
        return self._repo.get_by_id(ticket_id)

    def get_tickets_by_user(self, user_id: UUID | str) -> List[SupportTicket]:
        user_id = coerce_uuid(user_id)
        if user_id is None:
            return []
        return self._repo.list_by_user(user_id)

    def get_all_tickets(self) -> List[SupportTicket]:
        return self._repo.list_newest_first()
