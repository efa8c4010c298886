"""Demo accounts created on first start when the store is empty."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, List, NamedTuple, Optional

import structlog

from modules.accounts.constants import SubRole, UserRole
from modules.accounts.dtos import RegisterUserDTO
from modules.core.models import Address, Coordinates

if TYPE_CHECKING:
    from modules.accounts.services import AccountService

logger = structlog.get_logger(__name__)


class DemoUser(NamedTuple):
    email: str
    password: str
    role: UserRole
    name: str
    sub_role: Optional[SubRole] = None


DEMO_USERS: List[DemoUser] = [
    DemoUser("admin@supplychain.com", "admin123", UserRole.ADMIN, "Admin User"),
    DemoUser(
        "kitchen@supplychain.com",
        "kitchen123",
        UserRole.KITCHEN,
        "Kitchen Manager",
        SubRole.RESTAURANT_MANAGER,
    ),
    DemoUser("supplier@supplychain.com", "supplier123", UserRole.SUPPLIER, "Supplier Manager"),
    DemoUser(
        "vendor@supplychain.com",
        "vendor123",
        UserRole.VENDOR,
        "Vendor Manager",
        SubRole.VEGGIES_VENDOR,
    ),
    DemoUser(
        "transporter@supplychain.com",
        "transporter123",
        UserRole.TRANSPORTER,
        "Driver",
        SubRole.DRIVER,
    ),
]

DEMO_ADDRESS = Address(
    street="123 Demo Street",
    city="Mumbai",
    state="Maharashtra",
    zip_code="400001",
    coordinates=Coordinates(lat=19.0760, lng=72.8777),
)


def seed_demo_users(accounts: AccountService) -> int:
    """Register the demo accounts that are missing; returns how many were created."""
    created = 0
    for demo in DEMO_USERS:
        result = accounts.register(
            RegisterUserDTO(
                email=demo.email,
                password=demo.password,
                name=demo.name,
                role=demo.role,
                sub_role=demo.sub_role,
                phone=f"+91 {secrets.randbelow(9_000_000_000) + 1_000_000_000}",
                business_name=f"{demo.name} Business",
                address=DEMO_ADDRESS,
            )
        )
        if result.success:
            created += 1
    logger.info("seed.demo_users", created=created)
    return created
