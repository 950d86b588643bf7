"""
Order status value object.
"""
from enum import Enum
from typing import List, Tuple


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    PAID = 'PAID'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'

    @classmethod
    def choices(cls) -> List[Tuple[str, str]]:
        """Choices for ORM fields and serializers."""
        return [(status.value, status.name.title()) for status in cls]

    @property
    def is_terminal(self) -> bool:
        """Whether the order has reached the end of its lifecycle."""
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)
