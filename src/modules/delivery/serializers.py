"""Delivery DRF serializers for API input."""

from __future__ import annotations

from rest_framework import serializers

from modules.delivery.constants import RideStatus


class RideStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RideStatus.choices)


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
