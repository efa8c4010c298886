"""Order repositories package."""

from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.repositories.memory_repository import OrderMemoryRepository

__all__ = ["IOrderRepository", "OrderMemoryRepository"]
