"""Catalog DTOs: order lines to be priced against the product list."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class OrderLineDTO(BaseModel):
    """A product id and quantity picked by a kitchen.

    ``price`` overrides the catalog base price for internal callers; the
    HTTP serializers never accept it.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int
    price: Optional[Decimal] = None

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v
