"""
Order DTOs.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from shared.interfaces.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, PageMeta
from ...domain.entities.order import Order
from ...domain.entities.order_item import OrderItem
from ...domain.value_objects.order_status import OrderStatus


@dataclass
class OrderItemInputDTO:
    """DTO for one requested order line."""
    product_id: str
    quantity: int


@dataclass
class CreateOrderDTO:
    """DTO for creating an order."""
    items: List[OrderItemInputDTO]


@dataclass
class OrderPaginationDTO:
    """DTO for listing orders."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    status: Optional[OrderStatus] = None


@dataclass
class ChangeOrderStatusDTO:
    """DTO for a status change request."""
    id: UUID
    status: OrderStatus


@dataclass
class PaidOrderDTO:
    """DTO for a payment confirmation event."""
    order_id: UUID
    stripe_payment_id: str
    receipt_url: str


@dataclass
class OrderItemDTO:
    """DTO for order item output. name is only set when decorated from the catalog."""
    product_id: str
    price: Decimal
    quantity: int
    name: Optional[str] = None

    @classmethod
    def from_entity(cls, item: OrderItem, name: Optional[str] = None) -> 'OrderItemDTO':
        return cls(
            product_id=item.product_id,
            price=item.price,
            quantity=item.quantity,
            name=name,
        )


@dataclass
class OrderDTO:
    """DTO for order output."""
    id: UUID
    status: OrderStatus
    total_amount: Decimal
    total_items: int
    paid: bool
    paid_at: Optional[datetime]
    external_charge_id: Optional[str]
    receipt_url: Optional[str]
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, order: Order, names: Optional[Mapping[str, str]] = None) -> 'OrderDTO':
        """Create DTO from entity, attaching product names when given."""
        names = names or {}
        return cls(
            id=order.id,
            status=order.status,
            total_amount=order.total_amount,
            total_items=order.total_items,
            paid=order.paid,
            paid_at=order.paid_at,
            external_charge_id=order.external_charge_id,
            receipt_url=order.receipt.receipt_url if order.receipt else None,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemDTO.from_entity(item, names.get(item.product_id))
                for item in order.items
            ],
        )

    @property
    def line_items(self) -> List[Dict[str, Any]]:
        """Lines in the shape the payment service expects."""
        return [
            {'name': item.name, 'price': item.price, 'quantity': item.quantity}
            for item in self.items
        ]

    def to_dict(self, include_items: bool = True) -> Dict[str, Any]:
        data = {
            'id': str(self.id),
            'status': self.status.value,
            'total_amount': self.total_amount,
            'total_items': self.total_items,
            'paid': self.paid,
            'paid_at': self.paid_at,
            'external_charge_id': self.external_charge_id,
            'receipt_url': self.receipt_url,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if include_items:
            data['items'] = [
                {
                    'product_id': item.product_id,
                    'price': item.price,
                    'quantity': item.quantity,
                    'name': item.name,
                }
                for item in self.items
            ]
        return data


@dataclass
class OrderPageDTO:
    """DTO for a page of orders."""
    data: List[OrderDTO]
    meta: PageMeta

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': [order.to_dict(include_items=False) for order in self.data],
            'meta': {
                'total': self.meta.total,
                'page': self.meta.page,
                'last_page': self.meta.last_page,
            },
        }
