"""Unit tests for the inventory catalog."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.accounts.dtos import InventoryItemDTO, UpdateInventoryDTO
from modules.catalog.constants import ProductCategory
from modules.catalog.dtos import OrderLineDTO
from modules.catalog.exceptions import ProductNotFound

pytestmark = pytest.mark.unit


class TestProducts:
    def test_full_catalog_is_loaded(self, container):
        products = container.catalog.list_products()
        assert len(products) == 33
        assert {p.category for p in products} == set(ProductCategory.values)

    def test_products_by_category(self, container):
        dairy = container.catalog.get_products_by_category("dairy")
        assert [p.id for p in dairy] == ["d1", "d2", "d3", "d4", "d5", "d6"]

    def test_unknown_category_raises(self, container):
        with pytest.raises(ValueError):
            container.catalog.get_products_by_category("toys")

    def test_get_product(self, container):
        apple = container.catalog.get_product("f1")
        assert apple.name == "Apple"
        assert apple.base_price == Decimal("120")
        assert container.catalog.get_product("zz") is None


class TestBuildOrderItems:
    def test_uses_base_price_unless_overridden(self, container):
        items = container.catalog.build_order_items(
            [
                OrderLineDTO(product_id="f1", quantity=2),
                OrderLineDTO(product_id="v1", quantity=1, price=Decimal("35.50")),
            ]
        )
        assert [(i.product_name, i.category, i.price) for i in items] == [
            ("Apple", ProductCategory.FRUITS, Decimal("120")),
            ("Tomato", ProductCategory.VEGETABLES, Decimal("35.50")),
        ]
        assert items[0].unit == "kg"

    def test_unknown_product_raises(self, container):
        with pytest.raises(ProductNotFound):
            container.catalog.build_order_items([OrderLineDTO(product_id="nope", quantity=1)])

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLineDTO(product_id="f1", quantity=0)


class TestVendorListings:
    def test_only_in_stock_items(self, container, fruit_vendor):
        container.accounts.update_vendor_inventory(
            fruit_vendor.id,
            UpdateInventoryDTO(
                items=[
                    InventoryItemDTO(name="Apple", price=Decimal("110")),
                    InventoryItemDTO(name="Mango", price=Decimal("190"), in_stock=False),
                ]
            ),
        )
        listings = container.catalog.get_vendor_listings(fruit_vendor.id)
        assert [item.name for item in listings] == ["Apple"]

    def test_inactive_vendor_has_no_listings(self, container, fruit_vendor):
        container.accounts.update_vendor_inventory(
            fruit_vendor.id,
            UpdateInventoryDTO(items=[InventoryItemDTO(name="Apple", price=Decimal("110"))]),
        )
        container.accounts.set_active(fruit_vendor.id, False)
        assert container.catalog.get_vendor_listings(fruit_vendor.id) == []

    def test_non_vendor_has_no_listings(self, container, kitchen):
        assert container.catalog.get_vendor_listings(kitchen.id) == []
