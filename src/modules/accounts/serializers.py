"""Identity DRF serializers for API input.

Request payloads use the same camelCase keys as the response bodies;
``source`` maps them onto the snake_case DTO fields.  Business rules
live in ``AccountService``, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.constants import SubRole, UserRole


class CoordinatesSerializer(serializers.Serializer):
    lat = serializers.FloatField()
    lng = serializers.FloatField()


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(allow_blank=True, default="")
    city = serializers.CharField(allow_blank=True, default="")
    state = serializers.CharField(allow_blank=True, default="")
    zipCode = serializers.CharField(source="zip_code", allow_blank=True, default="")
    coordinates = CoordinatesSerializer(required=False, allow_null=True)


class RegisterSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField()
    name = serializers.CharField()
    role = serializers.ChoiceField(choices=UserRole.choices)
    subRole = serializers.ChoiceField(
        source="sub_role", choices=SubRole.choices, required=False, allow_null=True
    )
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    businessName = serializers.CharField(
        source="business_name", required=False, allow_null=True, allow_blank=True
    )
    address = AddressSerializer(required=False, allow_null=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField()


class UpdateProfileSerializer(serializers.Serializer):
    name = serializers.CharField(required=False)
    phone = serializers.CharField(required=False, allow_blank=True)
    businessName = serializers.CharField(source="business_name", required=False)
    address = AddressSerializer(required=False)
    subRole = serializers.ChoiceField(source="sub_role", choices=SubRole.choices, required=False)


class AgreementSerializer(serializers.Serializer):
    """``target`` is the partner's public unique id (or internal id)."""

    target = serializers.CharField()


class InventoryItemSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    unit = serializers.CharField(required=False, allow_null=True)
    inStock = serializers.BooleanField(source="in_stock", default=True)


class InventorySerializer(serializers.Serializer):
    items = InventoryItemSerializer(many=True)


class SubmitVerificationSerializer(serializers.Serializer):
    licenseNumber = serializers.CharField(source="license_number")
    rcNumber = serializers.CharField(source="rc_number")
    licenseImage = serializers.CharField(
        source="license_image", required=False, allow_null=True
    )


class ReviewVerificationSerializer(serializers.Serializer):
    approved = serializers.BooleanField()
    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class ActivationSerializer(serializers.Serializer):
    active = serializers.BooleanField()
