# Message handlers
from .handlers import (
    OrderMessageHandlers,
    CREATE_ORDER,
    FIND_ALL_ORDERS,
    FIND_ONE_ORDER,
    CHANGE_ORDER_STATUS,
    CREATE_PAYMENT_SESSION,
    PAYMENT_SUCCEEDED,
)

__all__ = [
    'OrderMessageHandlers',
    'CREATE_ORDER',
    'FIND_ALL_ORDERS',
    'FIND_ONE_ORDER',
    'CHANGE_ORDER_STATUS',
    'CREATE_PAYMENT_SESSION',
    'PAYMENT_SUCCEEDED',
]
