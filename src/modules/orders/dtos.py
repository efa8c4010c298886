"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: a priced line item (see
  ``CatalogService.build_order_items``).
- ``CreateOrderDTO``: input for order creation (nested items).
- ``AcceptOrderResult``: outcome of a supplier accepting an order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from modules.catalog.constants import ProductCategory
from modules.core.models import Address
from modules.orders.models import Order


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    ``price`` is the snapshot that will be charged, whatever the catalog
    says later.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    product_id: str
    product_name: str
    category: ProductCategory
    quantity: int
    unit: str
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Each item quantity must be positive.

    ``kitchen_name`` / ``kitchen_address`` default to the kitchen's profile.
    """

    model_config = ConfigDict(frozen=True)

    kitchen_id: UUID
    items: List[CreateOrderItemDTO]
    kitchen_name: Optional[str] = None
    kitchen_address: Optional[Address] = None
    notes: Optional[str] = None

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


class AcceptOrderResult(BaseModel):
    """Supplier acceptance outcome.

    ``assigned`` maps each routed category to its vendor; ``unassigned``
    lists the categories no eligible vendor could take.
    """

    model_config = ConfigDict(frozen=True)

    order: Order
    assigned: Dict[ProductCategory, UUID] = Field(default_factory=dict)
    unassigned: List[ProductCategory] = Field(default_factory=list)

    @property
    def fully_assigned(self) -> bool:
        return not self.unassigned
