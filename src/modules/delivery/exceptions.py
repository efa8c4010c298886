"""Delivery domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class RideAlreadyAccepted(DomainError):
    """The ride has already been claimed by a transporter."""


class InvalidRideStatus(DomainError):
    """Ride statuses only move forward, one step at a time."""


class IneligibleTransporter(DomainError):
    """The user is not an active transporter, or not the one on this ride."""
