"""Delivery ride constants: statuses, forward-only transitions and the
timestamp stamped on entering each status."""

from django.db import models


class RideStatus(models.TextChoices):
    REQUESTED = "requested", "Requested"
    ACCEPTED = "accepted", "Accepted"
    PICKED_UP = "picked_up", "Picked Up"
    IN_TRANSIT = "in_transit", "In Transit"
    DELIVERED = "delivered", "Delivered"


RIDE_TRANSITIONS: dict[str, set[str]] = {
    RideStatus.REQUESTED: {RideStatus.ACCEPTED},
    RideStatus.ACCEPTED: {RideStatus.PICKED_UP},
    RideStatus.PICKED_UP: {RideStatus.IN_TRANSIT, RideStatus.DELIVERED},
    RideStatus.IN_TRANSIT: {RideStatus.DELIVERED},
    RideStatus.DELIVERED: set(),
}

RIDE_TIMESTAMP_FIELDS: dict[str, str] = {
    RideStatus.ACCEPTED: "accepted_at",
    RideStatus.PICKED_UP: "picked_up_at",
    RideStatus.IN_TRANSIT: "in_transit_at",
    RideStatus.DELIVERED: "delivered_at",
}
