"""Support ticket DTOs."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.support.constants import TicketPriority


class CreateTicketDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    user_name: str
    subject: str
    message: str
    priority: TicketPriority = TicketPriority.MEDIUM

    @field_validator("subject", "message")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field may not be blank.")
        return v.strip()
