"""Catalog DRF serializers for API input."""

from __future__ import annotations

from rest_framework import serializers


class OrderLineSerializer(serializers.Serializer):
    """A product and quantity; prices always come from the catalog."""

    productId = serializers.CharField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)


class QuoteSerializer(serializers.Serializer):
    items = OrderLineSerializer(many=True, allow_empty=False)
