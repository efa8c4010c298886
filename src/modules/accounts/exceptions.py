"""Identity domain exceptions.

Registration, login and agreement failures are reported through
``OperationResult`` instead; these cover rule violations on the
role-specific profile extensions.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, RoleNotAllowed

__all__ = ["InvalidVerificationState", "RoleNotAllowed"]


class InvalidVerificationState(DomainError):
    """A verification review was requested for a user with nothing pending."""
