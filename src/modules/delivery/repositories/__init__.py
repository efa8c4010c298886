"""Delivery ride repositories package."""

from modules.delivery.repositories.interfaces import IRideRepository
from modules.delivery.repositories.memory_repository import RideMemoryRepository

__all__ = ["IRideRepository", "RideMemoryRepository"]
