"""
Order repository interface.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ..entities.order import Order
from ..value_objects.order_status import OrderStatus


class OrderRepository(ABC):
    """
    Abstract repository for Order aggregate.

    Every write is atomic and visible to the next read.
    """

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a new order together with its items."""
        pass

    @abstractmethod
    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Find an order by ID, items and receipt included."""
        pass

    @abstractmethod
    def find_all(
        self,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Order]:
        """Find orders, optionally filtered by status."""
        pass

    @abstractmethod
    def count(self, status: Optional[OrderStatus] = None) -> int:
        """Count orders, optionally filtered by status."""
        pass

    @abstractmethod
    def update_status(self, order_id: UUID, status: OrderStatus) -> Order:
        """Overwrite the status of an order."""
        pass

    @abstractmethod
    def mark_paid(
        self,
        order_id: UUID,
        external_charge_id: str,
        receipt_url: str,
        paid_at: Optional[datetime] = None,
    ) -> Order:
        """Set the paid fields and record the receipt in one write."""
        pass
