"""End-to-end order lifecycle driven entirely over HTTP.

Registration, agreements, ordering, routing, packing, delivery,
confirmation and invoicing, each step performed by the party that owns it.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

pytestmark = pytest.mark.integration

PASSWORD = "lifecycle-pass"


def _signup(api_client, email, name, role, sub_role=None):
    payload = {"email": email, "password": PASSWORD, "name": name, "role": role}
    if sub_role:
        payload["subRole"] = sub_role
    if role == "kitchen":
        payload["address"] = {"street": "7 Harbour St", "city": "Kochi", "zipCode": "682001"}
    assert api_client.post("/api/v1/auth/register/", payload).status_code == 201

    login = api_client.post("/api/v1/auth/login/", {"email": email, "password": PASSWORD})
    token = login.json()["data"]["token"]
    me = api_client.get("/api/v1/auth/me/", HTTP_AUTHORIZATION=f"Bearer {token}")
    return me.json(), token


def _as(api_client, token):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return api_client


def test_order_from_placement_to_invoices(api_client):
    kitchen, kitchen_token = _signup(api_client, "k@example.com", "Harbour Cafe", "kitchen", "chef")
    supplier, supplier_token = _signup(api_client, "s@example.com", "Coast Supply", "supplier")
    vendor, vendor_token = _signup(
        api_client, "v@example.com", "Orchard", "vendor", "fruit_vendor"
    )
    _, driver_token = _signup(api_client, "d@example.com", "Anil", "transporter", "driver")

    client = _as(api_client, supplier_token)
    for partner in (kitchen, vendor):
        response = client.post("/api/v1/users/agreements/", {"target": partner["uniqueId"]})
        assert response.status_code == 201

    order = _as(api_client, kitchen_token).post(
        "/api/v1/orders/",
        {"items": [{"productId": "f1", "quantity": 2}]},
    ).json()
    order_url = f"/api/v1/orders/{order['id']}/"
    assert order["kitchenAddress"]["city"] == "Kochi"

    accepted = _as(api_client, supplier_token).post(f"{order_url}accept/").json()
    assert accepted["assigned"] == {"fruits": vendor["id"]}

    client = _as(api_client, vendor_token)
    assert [o["id"] for o in client.get("/api/v1/orders/").json()] == [order["id"]]
    for status in ("packing", "packed_ready"):
        assert client.post(f"{order_url}status/", {"status": status}).status_code == 200

    client = _as(api_client, driver_token)
    ride = client.get("/api/v1/rides/available/").json()[0]
    assert ride["orderId"] == order["id"]
    assert ride["dropAddress"]["street"] == "7 Harbour St"
    client.post(f"/api/v1/rides/{ride['id']}/accept/")
    for status in ("picked_up", "in_transit", "delivered"):
        response = client.post(f"/api/v1/rides/{ride['id']}/status/", {"status": status})
        assert response.status_code == 200

    client = _as(api_client, kitchen_token)
    assert client.get(order_url).json()["status"] == "delivered"
    client.post(f"{order_url}status/", {"status": "kitchen_confirmed"})
    completed = client.post(f"{order_url}status/", {"status": "completed"}).json()
    assert [h["newStatus"] for h in completed["statusHistory"]] == [
        "pending_supplier",
        "vendor_assigned",
        "packing",
        "packed_ready",
        "pickup_requested",
        "in_transit",
        "delivered",
        "kitchen_confirmed",
        "completed",
    ]

    invoices = client.get(f"{order_url}invoices/").json()
    assert sorted(i["userRole"] for i in invoices) == ["kitchen", "supplier"]
    assert {Decimal(i["total"]) for i in invoices} == {Decimal("283.2")}

    kitchen_titles = [n["title"] for n in client.get("/api/v1/notifications/").json()]
    assert kitchen_titles[:2] == ["Order Completed", "New Invoice Generated"]
