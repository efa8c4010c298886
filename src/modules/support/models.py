"""Support ticket and its response thread.

Responses are append-only: once added a ``TicketResponse`` is never
edited or removed.
"""

from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

import uuid6
from pydantic import ConfigDict, Field

from modules.core.models import CamelModel, TimestampedEntity, utc_now
from modules.support.constants import TicketPriority, TicketStatus


class TicketResponse(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid6.uuid7)
    ticket_id: UUID
    user_id: UUID
    user_name: str
    message: str
    created_at: datetime = Field(default_factory=utc_now)


class SupportTicket(TimestampedEntity):
    user_id: UUID
    user_name: str
    subject: str
    message: str
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    responses: List[TicketResponse] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.subject} ({self.status})"
