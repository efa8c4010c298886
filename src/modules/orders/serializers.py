"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.  Responses are rendered from the
domain models directly (camelCase keys).
"""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.serializers import AddressSerializer
from modules.catalog.constants import ProductCategory
from modules.catalog.serializers import OrderLineSerializer
from modules.orders.constants import OrderStatus


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    items = OrderLineSerializer(many=True, allow_empty=False)
    kitchenName = serializers.CharField(source="kitchen_name", required=False)
    kitchenAddress = AddressSerializer(source="kitchen_address", required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AssignVendorSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ProductCategory.choices)
    vendorId = serializers.UUIDField(source="vendor_id")


class UpdateStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CancelSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default="")
