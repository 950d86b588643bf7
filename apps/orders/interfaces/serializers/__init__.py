# Serializers
from .order_serializer import (
    OrderItemInputSerializer,
    CreateOrderSerializer,
    OrderPaginationSerializer,
    OrderIdSerializer,
    ChangeOrderStatusSerializer,
    PaidOrderSerializer,
)

__all__ = [
    'OrderItemInputSerializer',
    'CreateOrderSerializer',
    'OrderPaginationSerializer',
    'OrderIdSerializer',
    'ChangeOrderStatusSerializer',
    'PaidOrderSerializer',
]
