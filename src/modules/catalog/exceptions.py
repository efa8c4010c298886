"""Catalog domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class ProductNotFound(DomainError):
    """A product referenced by an order line does not exist or is inactive."""
