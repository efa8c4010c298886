"""Integration tests for the order endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.accounts.constants import SubRole, UserRole
from modules.catalog.constants import ProductCategory
from modules.orders.constants import OrderStatus

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"

ORDER_PAYLOAD = {
    "items": [
        {"productId": "f1", "quantity": 2, "price": "50"},
        {"productId": "v1", "quantity": 1},
    ],
    "notes": "Back door",
}


@pytest.fixture()
def created(client_for, kitchen):
    response = client_for(kitchen).post(ORDERS_URL, ORDER_PAYLOAD)
    assert response.status_code == 201
    return response.json()


class TestCreateOrderApi:
    def test_kitchen_places_order(self, created):
        assert created["status"] == OrderStatus.PENDING_SUPPLIER
        assert created["orderNumber"].startswith("ORD")
        assert created["kitchenName"] == "Green Kitchen"
        assert created["kitchenAddress"]["city"] == "Pune"
        assert Decimal(created["totalAmount"]) == Decimal("280")
        assert [item["productName"] for item in created["items"]] == ["Apple", "Tomato"]

    def test_catalog_price_overrides_posted_price(self, created):
        apple = created["items"][0]
        assert Decimal(apple["price"]) == Decimal("120")
        assert apple["quantity"] == 2

    def test_only_kitchens(self, client_for, supplier):
        assert client_for(supplier).post(ORDERS_URL, ORDER_PAYLOAD).status_code == 403

    def test_unknown_product(self, client_for, kitchen):
        response = client_for(kitchen).post(
            ORDERS_URL, {"items": [{"productId": "zz", "quantity": 1}]}
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "payload",
        [
            {"items": []},
            {"items": [{"productId": "f1", "quantity": 0}]},
            {"items": [{"productId": "f1"}]},
        ],
    )
    def test_invalid_payloads(self, client_for, kitchen, payload):
        assert client_for(kitchen).post(ORDERS_URL, payload).status_code == 400


class TestListOrdersApi:
    def test_lists_are_scoped(self, client_for, network, kitchen, supplier, created):
        assert [o["id"] for o in client_for(kitchen).get(ORDERS_URL).json()] == [created["id"]]
        assert client_for(supplier).get(ORDERS_URL).json() == []

        pending = client_for(supplier).get(ORDERS_URL, {"pending": "true"}).json()
        assert [o["id"] for o in pending] == [created["id"]]

    def test_admin_sees_everything(self, client_for, admin, created):
        assert len(client_for(admin).get(ORDERS_URL).json()) == 1

    def test_retrieve(self, client_for, kitchen, created):
        client = client_for(kitchen)
        assert client.get(f"{ORDERS_URL}{created['id']}/").json()["id"] == created["id"]
        assert client.get(f"{ORDERS_URL}missing/").status_code == 404


class TestSupplierActionsApi:
    def test_accept_routes_categories(
        self, client_for, network, supplier, fruit_vendor, veggies_vendor, created
    ):
        response = client_for(supplier).post(f"{ORDERS_URL}{created['id']}/accept/")
        assert response.status_code == 200
        body = response.json()
        assert body["order"]["status"] == OrderStatus.VENDOR_ASSIGNED
        assert body["assigned"] == {
            ProductCategory.FRUITS: str(fruit_vendor.id),
            ProductCategory.VEGETABLES: str(veggies_vendor.id),
        }
        assert body["unassigned"] == []

    def test_second_supplier_conflicts(self, client_for, network, supplier, register, created):
        client_for(supplier).post(f"{ORDERS_URL}{created['id']}/accept/")
        rival = register("supplier", "rival@example.com")
        response = client_for(rival).post(f"{ORDERS_URL}{created['id']}/accept/")
        assert response.status_code == 409
        assert response.json()["code"] == "SupplierAlreadyAssigned"

    def test_assign_vendor(self, client_for, network, supplier, fruit_vendor, created):
        client = client_for(supplier)
        client.post(f"{ORDERS_URL}{created['id']}/accept/")
        response = client.post(
            f"{ORDERS_URL}{created['id']}/assign-vendor/",
            {"category": "fruits", "vendorId": str(fruit_vendor.id)},
        )
        assert response.status_code == 200
        assert response.json()["assigned"] is True

    def test_assign_vendor_without_matching_items(
        self, client_for, network, supplier, fruit_vendor, created
    ):
        client = client_for(supplier)
        client.post(f"{ORDERS_URL}{created['id']}/accept/")
        response = client.post(
            f"{ORDERS_URL}{created['id']}/assign-vendor/",
            {"category": "dairy", "vendorId": str(fruit_vendor.id)},
        )
        assert response.status_code == 400
        assert response.json() == {"assigned": False, "items": []}

    def test_assign_vendor_by_other_supplier(
        self, client_for, network, register, supplier, created
    ):
        client_for(supplier).post(f"{ORDERS_URL}{created['id']}/accept/")
        rival = register(UserRole.SUPPLIER, "rival@example.com")
        own_vendor = register(
            UserRole.VENDOR, "own-fruit@example.com", sub_role=SubRole.FRUIT_VENDOR
        )
        network.accounts.establish_agreement(rival.id, own_vendor.unique_id)

        response = client_for(rival).post(
            f"{ORDERS_URL}{created['id']}/assign-vendor/",
            {"category": "fruits", "vendorId": str(own_vendor.id)},
        )
        assert response.status_code == 409
        assert response.json()["code"] == "TransitionNotAllowed"

    def test_eligible_vendors(self, client_for, network, supplier, fruit_vendor):
        response = client_for(supplier).get(
            f"{ORDERS_URL}eligible-vendors/", {"category": "fruits"}
        )
        assert [v["id"] for v in response.json()] == [str(fruit_vendor.id)]

    def test_eligible_vendors_unknown_category(self, client_for, network, supplier):
        response = client_for(supplier).get(
            f"{ORDERS_URL}eligible-vendors/", {"category": "toys"}
        )
        assert response.status_code == 400


class TestStatusApi:
    def test_kitchen_cannot_pack(self, client_for, kitchen, created):
        response = client_for(kitchen).post(
            f"{ORDERS_URL}{created['id']}/status/", {"status": "packing"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "TransitionNotAllowed"

    def test_ride_driven_status_is_rejected(self, client_for, kitchen, created):
        response = client_for(kitchen).post(
            f"{ORDERS_URL}{created['id']}/status/", {"status": "delivered"}
        )
        assert response.status_code == 409

    def test_invalid_transition(self, client_for, kitchen, created):
        response = client_for(kitchen).post(
            f"{ORDERS_URL}{created['id']}/status/", {"status": "completed"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "InvalidOrderStatus"

    def test_unknown_status_value(self, client_for, kitchen, created):
        response = client_for(kitchen).post(
            f"{ORDERS_URL}{created['id']}/status/", {"status": "lost"}
        )
        assert response.status_code == 400

    def test_cancel(self, client_for, kitchen, created):
        client = client_for(kitchen)
        response = client.post(f"{ORDERS_URL}{created['id']}/cancel/", {"notes": "Changed menu"})
        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.CANCELLED
        assert response.json()["statusHistory"][-1]["notes"] == "Changed menu"

        again = client.post(f"{ORDERS_URL}{created['id']}/cancel/")
        assert again.status_code == 409

    def test_no_ride_or_invoices_yet(self, client_for, kitchen, created):
        client = client_for(kitchen)
        assert client.get(f"{ORDERS_URL}{created['id']}/ride/").status_code == 404
        assert client.get(f"{ORDERS_URL}{created['id']}/invoices/").json() == []
