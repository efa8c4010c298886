"""Inventory catalog service.

Read-only access to the predefined product list, plus the two bridges
the rest of the system needs: vendor listings (from the registry) and
pricing of kitchen order lines into order item snapshots.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional
from uuid import UUID

import structlog

from modules.accounts.constants import UserRole
from modules.catalog.constants import ProductCategory
from modules.catalog.exceptions import ProductNotFound
from modules.catalog.models import Product, load_products
from modules.orders.dtos import CreateOrderItemDTO

if TYPE_CHECKING:
    from modules.accounts.models import InventoryItem
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.catalog.dtos import OrderLineDTO

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for the inventory catalog."""

    def __init__(
        self,
        user_repository: IUserRepository,
        products: Optional[Iterable[Product]] = None,
    ) -> None:
        self._user_repo = user_repository
        self._products: Dict[str, Product] = {
            product.id: product for product in (products or load_products())
        }

    def list_products(self, active_only: bool = True) -> List[Product]:
        return [p for p in self._products.values() if p.is_active or not active_only]

    def get_products_by_category(self, category: ProductCategory | str) -> List[Product]:
        category = ProductCategory(category)
        return [p for p in self.list_products() if p.category == category]

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def get_vendor_listings(self, vendor_id: UUID | str) -> List[InventoryItem]:
        """In-stock inventory of an active vendor; empty for anyone else."""
        vendor = self._user_repo.get_by_id(vendor_id)
        if vendor is None or vendor.role != UserRole.VENDOR or not vendor.is_active:
            return []
        return [item for item in vendor.inventory or [] if item.in_stock]

    def build_order_items(self, lines: Iterable[OrderLineDTO]) -> List[CreateOrderItemDTO]:
        """Price order lines into item snapshots for ``create_order``.

        Raises:
            ProductNotFound: a line references an unknown or inactive product.
        """
        items = []
        for line in lines:
            product = self.get_product(line.product_id)
            if product is None or not product.is_active:
                logger.warning("catalog.product_not_found", product_id=line.product_id)
                raise ProductNotFound(f"Product {line.product_id} not found.")
            items.append(
                CreateOrderItemDTO(
                    product_id=product.id,
                    product_name=product.name,
                    category=product.category,
                    quantity=line.quantity,
                    unit=product.unit,
                    price=line.price if line.price is not None else product.base_price,
                )
            )
        return items
