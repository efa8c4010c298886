"""Support DRF serializers for API input."""

from __future__ import annotations

from rest_framework import serializers

from modules.support.constants import TicketPriority, TicketStatus


class CreateTicketSerializer(serializers.Serializer):
    subject = serializers.CharField()
    message = serializers.CharField()
    priority = serializers.ChoiceField(
        choices=TicketPriority.choices, default=TicketPriority.MEDIUM
    )


class TicketResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class TicketStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TicketStatus.choices)
