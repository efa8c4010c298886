from __future__ import annotations

from typing import Callable, Optional

import pytest
from rest_framework.test import APIClient

from modules.accounts.constants import SubRole, UserRole
from modules.accounts.dtos import RegisterUserDTO
from modules.accounts.models import User
from modules.catalog.dtos import OrderLineDTO
from modules.core.container import ServiceContainer, build_container, set_container
from modules.core.models import Address
from modules.orders.dtos import CreateOrderDTO
from modules.orders.models import Order

PASSWORD = "s3cret-pass"

KITCHEN_ADDRESS = Address(street="1 Market Road", city="Pune", state="MH", zip_code="411001")


@pytest.fixture(autouse=True)
def _fast_password_hashing(settings):
    """MD5 keeps registration fast; production uses PBKDF2."""
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture(autouse=True)
def container() -> ServiceContainer:
    """Fresh, empty container installed for the HTTP layer."""
    services = build_container()
    services.start(seed_demo_data=False)
    set_container(services)
    yield services
    set_container(None)


@pytest.fixture()
def register(container) -> Callable[..., User]:
    def _register(
        role: UserRole,
        email: str,
        name: Optional[str] = None,
        sub_role: Optional[SubRole] = None,
        **extra,
    ) -> User:
        result = container.accounts.register(
            RegisterUserDTO(
                email=email,
                password=PASSWORD,
                name=name or email.split("@")[0].title(),
                role=role,
                sub_role=sub_role,
                **extra,
            )
        )
        assert result.success, result.message
        return container.accounts.get_user(result.data["user_id"])

    return _register


@pytest.fixture()
def kitchen(register) -> User:
    return register(
        UserRole.KITCHEN,
        "kitchen@example.com",
        name="Green Kitchen",
        sub_role=SubRole.CHEF,
        address=KITCHEN_ADDRESS,
    )


@pytest.fixture()
def supplier(register) -> User:
    return register(UserRole.SUPPLIER, "supplier@example.com", name="Fresh Supplies")


@pytest.fixture()
def fruit_vendor(register) -> User:
    return register(
        UserRole.VENDOR, "fruits@example.com", name="Fruit Co", sub_role=SubRole.FRUIT_VENDOR
    )


@pytest.fixture()
def veggies_vendor(register) -> User:
    return register(
        UserRole.VENDOR, "veggies@example.com", name="Veg Co", sub_role=SubRole.VEGGIES_VENDOR
    )


@pytest.fixture()
def transporter(register) -> User:
    return register(
        UserRole.TRANSPORTER, "driver@example.com", name="Ravi", sub_role=SubRole.DRIVER
    )


@pytest.fixture()
def admin(register) -> User:
    return register(UserRole.ADMIN, "admin@example.com", name="Admin")


@pytest.fixture()
def network(container, kitchen, supplier, fruit_vendor, veggies_vendor, transporter):
    """Kitchen and vendors all agreed with the supplier."""
    for partner in (kitchen, fruit_vendor, veggies_vendor):
        assert container.accounts.establish_agreement(supplier.id, partner.unique_id).success
    return container


@pytest.fixture()
def place_order(container, kitchen) -> Callable[..., Order]:
    """Place an order for *kitchen* from ``(product_id, quantity, price)`` lines."""

    def _place(*lines, kitchen_user: Optional[User] = None) -> Order:
        lines = lines or (("f1", 2, "50"), ("v1", 1, "40"))
        items = container.catalog.build_order_items(
            OrderLineDTO(product_id=pid, quantity=qty, price=price) for pid, qty, price in lines
        )
        return container.orders.create_order(
            CreateOrderDTO(kitchen_id=(kitchen_user or kitchen).id, items=items)
        )

    return _place


@pytest.fixture()
def api_client() -> APIClient:
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def client_for(container) -> Callable[[User], APIClient]:
    """APIClient authenticated with a fresh session of *user*."""

    def _client(user: User) -> APIClient:
        result = container.accounts.login(user.email, PASSWORD)
        assert result.success, result.message
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {result.data['token']}")
        return client

    return _client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
