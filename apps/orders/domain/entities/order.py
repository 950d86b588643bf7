"""
Order entity (Aggregate Root).
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from shared.domain import AggregateRoot, utcnow
from ..value_objects.catalog_product import quantize_price
from ..value_objects.order_status import OrderStatus
from ..value_objects.order_receipt import OrderReceipt
from ..events import OrderPaid, OrderPlaced, OrderStatusChanged
from ..exceptions import EmptyOrderError, InvalidQuantityError
from .order_item import OrderItem


@dataclass(eq=False)
class Order(AggregateRoot):
    """
    Order entity representing a customer order.

    total_amount and total_items are computed once by create() and are
    carried verbatim afterwards; rehydrating an order never recomputes them.
    """
    items: List[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    total_amount: Decimal = Decimal('0')
    total_items: int = 0
    paid: bool = False
    paid_at: Optional[datetime] = None
    external_charge_id: Optional[str] = None
    receipt: Optional[OrderReceipt] = None

    @classmethod
    def create(cls, lines: Iterable[Tuple[str, Decimal, int]]) -> 'Order':
        """
        Factory method to create a new order.

        Args:
            lines: (product_id, unit_price, quantity) for every requested item,
                with the unit price already resolved from the catalog. Prices are
                rounded to cents before the totals are summed.
        """
        lines = list(lines)
        if not lines:
            raise EmptyOrderError()

        order = cls()
        for product_id, price, quantity in lines:
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise InvalidQuantityError(product_id, quantity)
            order.items.append(
                OrderItem(
                    order_id=order.id,
                    product_id=str(product_id),
                    price=quantize_price(price),
                    quantity=quantity,
                )
            )

        order.total_amount = sum((item.subtotal for item in order.items), Decimal('0'))
        order.total_items = sum(item.quantity for item in order.items)
        order.add_domain_event(
            OrderPlaced(
                order_id=order.id,
                total_amount=order.total_amount,
                total_items=order.total_items,
            )
        )
        return order

    def change_status(self, new_status: OrderStatus) -> bool:
        """
        Overwrite the status. Any status may move to any other.

        Returns False without touching the order when the status is unchanged.
        """
        new_status = OrderStatus(new_status)
        if new_status == self.status:
            return False
        old_status = self.status
        self.status = new_status
        self.touch()
        self.add_domain_event(
            OrderStatusChanged(
                order_id=self.id,
                old_status=old_status,
                new_status=new_status,
            )
        )
        return True

    def mark_paid(
        self,
        external_charge_id: str,
        receipt_url: str,
        paid_at: Optional[datetime] = None,
    ) -> None:
        """Record a payment confirmation. Re-applying overwrites the previous one."""
        self.status = OrderStatus.PAID
        self.paid = True
        self.paid_at = paid_at or utcnow()
        self.external_charge_id = external_charge_id
        self.receipt = OrderReceipt(receipt_url=receipt_url)
        self.touch()
        self.add_domain_event(
            OrderPaid(
                order_id=self.id,
                external_charge_id=external_charge_id,
                receipt_url=receipt_url,
            )
        )

    @property
    def product_ids(self) -> List[str]:
        """Distinct product ids of the order lines, in line order."""
        return list(dict.fromkeys(item.product_id for item in self.items))
