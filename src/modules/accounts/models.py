"""User aggregate and its role-specific extensions.

Business rules implemented:
- Agreements are a symmetric edge stored on both users (``agreements``);
  ``is_agreed_with`` accepts an edge found on either side so a half-written
  pair never blocks routing.
- Users are never hard-deleted; deactivation flips ``is_active``.
- Vendors carry an ``inventory``; transporters carry ``verification_details``.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import uuid6
from pydantic import Field

from modules.accounts.constants import (
    UNIQUE_ID_ALPHABET,
    UNIQUE_ID_LENGTH,
    SubRole,
    UserRole,
    VerificationStatus,
)
from modules.core.models import Address, CamelModel, TimestampedEntity


class InventoryItem(CamelModel):
    id: UUID = Field(default_factory=uuid6.uuid7)
    name: str
    price: Decimal
    unit: Optional[str] = None
    in_stock: bool = True


class VerificationDetails(CamelModel):
    license_number: str
    rc_number: str
    license_image: Optional[str] = None
    status: VerificationStatus = VerificationStatus.PENDING
    rejection_reason: Optional[str] = None


class User(TimestampedEntity):
    """Registered party: kitchen, supplier, vendor, transporter or admin.

    ``unique_id`` is the short public identifier shared with partners to
    establish agreements; ``id`` stays internal.  ``password`` holds a
    Django password hash, never the raw value.
    """

    unique_id: str
    email: str
    password: str
    name: str
    phone: str = ""
    role: UserRole
    sub_role: Optional[SubRole] = None
    business_name: Optional[str] = None
    address: Address = Field(default_factory=Address)
    is_active: bool = True
    agreements: List[UUID] = Field(default_factory=list)
    inventory: Optional[List[InventoryItem]] = None
    verification_details: Optional[VerificationDetails] = None

    @staticmethod
    def generate_unique_id() -> str:
        return "".join(secrets.choice(UNIQUE_ID_ALPHABET) for _ in range(UNIQUE_ID_LENGTH))

    @property
    def display_name(self) -> str:
        return self.business_name or self.name

    def has_role(self, role: UserRole) -> bool:
        return self.role == role

    def is_agreed_with(self, other: User) -> bool:
        return other.id in self.agreements or self.id in other.agreements

    def public_dict(self) -> dict:
        """JSON dict without the password hash."""
        return self.to_json_dict(exclude={"password"})

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> ({self.role})"
