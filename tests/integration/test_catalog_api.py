"""Integration tests for the product catalog endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest

pytestmark = pytest.mark.integration

PRODUCTS_URL = "/api/v1/products/"


class TestProductApi:
    def test_list_requires_session(self, api_client):
        assert api_client.get(PRODUCTS_URL).status_code == 401

    def test_list_by_category(self, client_for, kitchen):
        response = client_for(kitchen).get(PRODUCTS_URL, {"category": "meat"})
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["m1", "m2", "m3", "m4", "m5"]
        assert response.json()[0]["basePrice"] == "280"

    def test_unknown_category(self, client_for, kitchen):
        assert client_for(kitchen).get(PRODUCTS_URL, {"category": "toys"}).status_code == 400

    def test_retrieve(self, client_for, kitchen):
        assert client_for(kitchen).get(f"{PRODUCTS_URL}d1/").json()["name"] == "Milk"
        assert client_for(kitchen).get(f"{PRODUCTS_URL}zz/").status_code == 404


class TestQuoteApi:
    def test_prices_lines(self, client_for, kitchen):
        response = client_for(kitchen).post(
            f"{PRODUCTS_URL}quote/",
            {
                "items": [
                    {"productId": "f1", "quantity": 2},
                    {"productId": "v1", "quantity": 1},
                ]
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["totalAmount"]) == Decimal("280")
        assert body["items"][1]["productName"] == "Tomato"

    def test_posted_price_is_ignored(self, client_for, kitchen):
        response = client_for(kitchen).post(
            f"{PRODUCTS_URL}quote/",
            {"items": [{"productId": "d1", "quantity": 1, "price": "0.01"}]},
        )
        assert response.status_code == 200
        assert Decimal(response.json()["totalAmount"]) == Decimal("60")

    def test_unknown_product(self, client_for, kitchen):
        response = client_for(kitchen).post(
            f"{PRODUCTS_URL}quote/", {"items": [{"productId": "zz", "quantity": 1}]}
        )
        assert response.status_code == 400
