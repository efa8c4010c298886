"""Identity DTOs for the Service Layer.

Framework-agnostic, immutable (``frozen=True``) pydantic contracts between
the API layer and ``AccountService``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.accounts.constants import SUB_ROLES, SubRole, UserRole
from modules.core.models import Address


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValueError("Enter a valid email address.")
    return value


class RegisterUserDTO(BaseModel):
    """Registration payload.

    Validates:
    - email is normalised (trimmed, lower-cased) and looks like an address.
    - ``sub_role`` belongs to the chosen ``role``.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    name: str
    role: UserRole
    sub_role: Optional[SubRole] = None
    phone: str = ""
    business_name: Optional[str] = None
    address: Optional[Address] = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password", "name")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field may not be blank.")
        return v

    @model_validator(mode="after")
    def sub_role_matches_role(self):
        if self.sub_role is not None and self.sub_role not in SUB_ROLES[self.role]:
            raise ValueError(f"Sub-role {self.sub_role} is not valid for role {self.role}.")
        return self


class UpdateProfileDTO(BaseModel):
    """Partial profile update; ``None`` fields are left untouched."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    business_name: Optional[str] = None
    address: Optional[Address] = None
    sub_role: Optional[SubRole] = None


class InventoryItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    unit: Optional[str] = None
    in_stock: bool = True

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class UpdateInventoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: List[InventoryItemDTO]


class SubmitVerificationDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    license_number: str
    rc_number: str
    license_image: Optional[str] = None

    @field_validator("license_number", "rc_number")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field may not be blank.")
        return v.strip()
