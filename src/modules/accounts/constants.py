"""Identity domain constants: roles, sub-roles and verification states."""

import string

from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    KITCHEN = "kitchen", "Kitchen"
    SUPPLIER = "supplier", "Supplier"
    VENDOR = "vendor", "Vendor"
    TRANSPORTER = "transporter", "Transporter"


class SubRole(models.TextChoices):
    CHEF = "chef", "Chef"
    RESTAURANT_MANAGER = "restaurant_manager", "Restaurant Manager"
    VEGGIES_VENDOR = "veggies_vendor", "Vegetables Vendor"
    FRUIT_VENDOR = "fruit_vendor", "Fruit Vendor"
    BUTCHER = "butcher", "Butcher"
    DAIRY_VENDOR = "dairy_vendor", "Dairy Vendor"
    DRIVER = "driver", "Driver"
    DELIVERY_AGENT = "delivery_agent", "Delivery Agent"


SUB_ROLES: dict[str, frozenset[str]] = {
    UserRole.ADMIN: frozenset(),
    UserRole.KITCHEN: frozenset({SubRole.CHEF, SubRole.RESTAURANT_MANAGER}),
    UserRole.SUPPLIER: frozenset(),
    UserRole.VENDOR: frozenset(
        {
            SubRole.VEGGIES_VENDOR,
            SubRole.FRUIT_VENDOR,
            SubRole.BUTCHER,
            SubRole.DAIRY_VENDOR,
        }
    ),
    UserRole.TRANSPORTER: frozenset({SubRole.DRIVER, SubRole.DELIVERY_AGENT}),
}


class VerificationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    VERIFIED = "verified", "Verified"
    REJECTED = "rejected", "Rejected"


UNIQUE_ID_LENGTH = 12
UNIQUE_ID_ALPHABET = string.ascii_letters + string.digits
UNIQUE_ID_MAX_RETRIES = 5

SESSION_TOKEN_BYTES = 32
