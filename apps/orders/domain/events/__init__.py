# Domain events
from .order_events import OrderPlaced, OrderStatusChanged, OrderPaid

__all__ = ['OrderPlaced', 'OrderStatusChanged', 'OrderPaid']
