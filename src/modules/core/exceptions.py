"""Exceptions shared across bounded contexts.

Module-specific exceptions live in each module's ``exceptions.py``; the
API layer catches them and translates them into HTTP responses.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for business-rule violations raised by the service layer."""


class RoleNotAllowed(DomainError):
    """The acting user's role does not permit the requested operation."""


class SnapshotError(Exception):
    """The state snapshot could not be read or written."""
