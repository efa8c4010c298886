"""Catalog product model.

Products are static reference data: they are never persisted in the
snapshot and carry short string ids (``f1``, ``v3``...) instead of UUIDs.
"""

from __future__ import annotations

from decimal import Decimal

from modules.catalog.constants import INVENTORY_PRODUCTS, ProductCategory
from modules.core.models import CamelModel


class Product(CamelModel):
    id: str
    name: str
    category: ProductCategory
    unit: str
    base_price: Decimal
    description: str = ""
    is_active: bool = True

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"


def load_products() -> list[Product]:
    return [
        Product(
            id=product_id,
            name=name,
            category=category,
            unit=unit,
            base_price=Decimal(price),
            description=description,
        )
        for product_id, name, category, unit, price, description in INVENTORY_PRODUCTS
    ]
