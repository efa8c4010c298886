"""User repositories package."""

from modules.accounts.repositories.interfaces import IUserRepository
from modules.accounts.repositories.memory_repository import UserMemoryRepository

__all__ = ["IUserRepository", "UserMemoryRepository"]
