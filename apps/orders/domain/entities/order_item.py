"""
Order item entity.
"""
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain import BaseEntity


@dataclass(eq=False)
class OrderItem(BaseEntity):
    """Order line holding the unit price snapshot taken at creation time."""
    order_id: UUID
    product_id: str
    price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        """Calculate the item subtotal."""
        return self.price * self.quantity
