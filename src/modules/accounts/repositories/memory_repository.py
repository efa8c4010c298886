"""In-memory implementation of the User repository."""

from __future__ import annotations

from typing import List, Optional

from modules.accounts.constants import UserRole
from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository
from modules.core.repositories.memory import InMemoryRepository


class UserMemoryRepository(InMemoryRepository[User], IUserRepository):
    """Concrete User repository backed by the ``users`` collection."""

    collection_name = "users"

    def get_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        matches = self.filter(lambda user: user.email.lower() == needle)
        return matches[0] if matches else None

    def get_by_unique_id(self, unique_id: str) -> Optional[User]:
        matches = self.filter(lambda user: user.unique_id == unique_id)
        return matches[0] if matches else None

    def list_by_role(self, role: UserRole, active_only: bool = False) -> List[User]:
        return self.filter(
            lambda user: user.role == role and (user.is_active or not active_only)
        )
