"""User repository interface.

Extends ``IRepository[User]`` with the look-ups the registry needs:
login by email, agreement exchange by public identifier, and role scans
for routing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.constants import UserRole
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive look-up by email."""

    @abstractmethod
    def get_by_unique_id(self, unique_id: str) -> Optional[User]:
        """Look-up by the public identifier used for agreements."""

    @abstractmethod
    def list_by_role(self, role: UserRole, active_only: bool = False) -> List[User]:
        """List users holding *role*."""
