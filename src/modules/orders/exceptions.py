"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError


class InvalidOrderStatus(DomainError):
    """The order's current status does not allow the requested transition."""


class TransitionNotAllowed(DomainError):
    """The acting party may not move this order to the requested status."""


class SupplierAlreadyAssigned(DomainError):
    """Another supplier has already accepted the order."""


class IneligibleSupplier(DomainError):
    """The user is not an active supplier."""
