"""Notification constants: severities and the fixed message tables."""

from typing import NamedTuple

from django.db import models


class NotificationType(models.TextChoices):
    INFO = "info", "Info"
    SUCCESS = "success", "Success"
    WARNING = "warning", "Warning"
    ERROR = "error", "Error"


class StatusNotice(NamedTuple):
    recipient: str
    title: str
    message: str
    type: str


# Order status -> notice sent on entering it.  ``message`` takes ``{number}``.
STATUS_NOTIFICATIONS: dict[str, StatusNotice] = {
    "vendor_assigned": StatusNotice(
        "kitchen",
        "Vendor Assigned",
        "Vendors have been assigned to your order #{number}",
        NotificationType.INFO,
    ),
    "packed_ready": StatusNotice(
        "kitchen",
        "Order Ready for Pickup",
        "Order #{number} is packed and ready for pickup",
        NotificationType.SUCCESS,
    ),
    "in_transit": StatusNotice(
        "kitchen",
        "Order In Transit",
        "Your order #{number} is on the way",
        NotificationType.INFO,
    ),
    "delivered": StatusNotice(
        "kitchen",
        "Order Delivered",
        "Order #{number} has been delivered. Please confirm receipt.",
        NotificationType.SUCCESS,
    ),
    "completed": StatusNotice(
        "kitchen",
        "Order Completed",
        "Order #{number} has been completed",
        NotificationType.SUCCESS,
    ),
}

NEW_ORDER_TITLE = "New Order Available"
NEW_ORDER_MESSAGE = "Order #{number} from {kitchen} is waiting for assignment"

VENDOR_ASSIGNMENT_TITLE = "New Order Assignment"
VENDOR_ASSIGNMENT_MESSAGE = "You have been assigned to fulfill {category} items for order #{number}"

RIDE_REQUEST_TITLE = "New Delivery Request"
RIDE_REQUEST_MESSAGE = "A new delivery pickup is available near you"

INVOICE_TITLE = "New Invoice Generated"
INVOICE_MESSAGE = "Invoice #{number} has been generated for your order"
