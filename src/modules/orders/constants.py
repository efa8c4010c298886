"""Order domain constants.

Defines status choices, the order state machine, the per-role table of
statuses each party may set, and vendor routing by product category.
"""

from django.db import models

from modules.accounts.constants import SubRole, UserRole
from modules.catalog.constants import ProductCategory
from modules.delivery.constants import RideStatus


class OrderStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PENDING_SUPPLIER = "pending_supplier", "Pending Supplier"
    VENDOR_ASSIGNED = "vendor_assigned", "Vendor Assigned"
    PACKING = "packing", "Packing"
    PACKED_READY = "packed_ready", "Packed & Ready"
    PICKUP_REQUESTED = "pickup_requested", "Pickup Requested"
    IN_TRANSIT = "in_transit", "In Transit"
    DELIVERED = "delivered", "Delivered"
    KITCHEN_CONFIRMED = "kitchen_confirmed", "Kitchen Confirmed"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.DRAFT: {OrderStatus.PENDING_SUPPLIER, OrderStatus.CANCELLED},
    OrderStatus.PENDING_SUPPLIER: {OrderStatus.VENDOR_ASSIGNED, OrderStatus.CANCELLED},
    OrderStatus.VENDOR_ASSIGNED: {OrderStatus.PACKING, OrderStatus.CANCELLED},
    OrderStatus.PACKING: {OrderStatus.PACKED_READY, OrderStatus.CANCELLED},
    OrderStatus.PACKED_READY: {OrderStatus.PICKUP_REQUESTED, OrderStatus.CANCELLED},
    OrderStatus.PICKUP_REQUESTED: {OrderStatus.IN_TRANSIT, OrderStatus.CANCELLED},
    OrderStatus.IN_TRANSIT: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: {
        OrderStatus.KITCHEN_CONFIRMED,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.KITCHEN_CONFIRMED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

# Statuses that mirror the delivery ride; never set directly by a party.
RIDE_DRIVEN_STATES: set[str] = {
    OrderStatus.PICKUP_REQUESTED,
    OrderStatus.IN_TRANSIT,
    OrderStatus.DELIVERED,
}

ROLE_ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    UserRole.KITCHEN: {
        OrderStatus.KITCHEN_CONFIRMED,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    UserRole.SUPPLIER: {OrderStatus.VENDOR_ASSIGNED, OrderStatus.CANCELLED},
    UserRole.VENDOR: {OrderStatus.PACKING, OrderStatus.PACKED_READY},
    UserRole.TRANSPORTER: set(),
    UserRole.ADMIN: {OrderStatus.CANCELLED},
}

RIDE_TO_ORDER_STATUS: dict[str, str] = {
    RideStatus.ACCEPTED: OrderStatus.PICKUP_REQUESTED,
    RideStatus.PICKED_UP: OrderStatus.IN_TRANSIT,
    RideStatus.DELIVERED: OrderStatus.DELIVERED,
}

CATEGORY_TO_VENDOR_SUBROLE: dict[str, str] = {
    ProductCategory.FRUITS: SubRole.FRUIT_VENDOR,
    ProductCategory.VEGETABLES: SubRole.VEGGIES_VENDOR,
    ProductCategory.GRAINS: SubRole.VEGGIES_VENDOR,
    ProductCategory.SPICES: SubRole.VEGGIES_VENDOR,
    ProductCategory.MEAT: SubRole.BUTCHER,
    ProductCategory.DAIRY: SubRole.DAIRY_VENDOR,
}

ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_MAX_RETRIES = 5
