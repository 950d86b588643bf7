"""
Order lifecycle events.

Recorded by the Order aggregate and logged by the use cases once the
corresponding write has been committed.
"""
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain import DomainEvent
from ..value_objects.order_status import OrderStatus


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    order_id: UUID
    total_amount: Decimal
    total_items: int


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Status overwritten by a status-change request; no transition rules apply."""
    order_id: UUID
    old_status: OrderStatus
    new_status: OrderStatus


@dataclass(frozen=True)
class OrderPaid(DomainEvent):
    """Payment confirmed by the payment service."""
    order_id: UUID
    external_charge_id: str
    receipt_url: str
