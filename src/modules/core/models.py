"""Base entities and shared value types for the in-process domain store.

Provides:
- ``CamelModel``: pydantic base with snake_case attributes and camelCase
  aliases.  Snapshots and API payloads are dumped ``by_alias`` so the
  persisted field set matches what UI collaborators read (``kitchenId``,
  ``totalAmount``, ``isRead``...).
- ``BaseEntity``: UUIDv7 primary key + ``created_at``.
- ``TimestampedEntity``: adds ``updated_at`` bookkeeping via ``touch()``.
- ``Address`` / ``Coordinates``: value objects shared by users, orders and
  rides.
- ``OperationResult``: the ``{success, message}`` contract returned by
  registry operations whose failures are expected outcomes, not errors.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import uuid6
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_reference_number(prefix: str) -> str:
    """Human-readable reference: *prefix* + last 6 epoch-millis digits + 3 random."""
    millis = int(utc_now().timestamp() * 1000)
    return f"{prefix}{millis % 1_000_000:06d}{secrets.randbelow(1000):03d}"


def coerce_uuid(value: Any) -> Optional[UUID]:
    """Parse *value* as a UUID, returning ``None`` for malformed input."""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self, **kwargs: Any) -> Dict[str, Any]:
        """Dump to a JSON-safe dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class BaseEntity(CamelModel):
    """Abstract base with UUIDv7 identifier and creation timestamp."""

    id: UUID = Field(default_factory=uuid6.uuid7)
    created_at: datetime = Field(default_factory=utc_now)


class TimestampedEntity(BaseEntity):
    """Entity whose mutations are tracked through ``updated_at``."""

    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> None:
        self.updated_at = utc_now()


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class Coordinates(CamelModel):
    lat: float
    lng: float


class Address(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    coordinates: Optional[Coordinates] = None

    def __str__(self) -> str:
        parts = [self.street, self.city, self.state, self.zip_code]
        return ", ".join(part for part in parts if part)


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------


class OperationResult(CamelModel):
    """Outcome of an operation whose failure is a normal, reportable result."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data: Any) -> OperationResult:
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> OperationResult:
        return cls(success=False, message=message)
