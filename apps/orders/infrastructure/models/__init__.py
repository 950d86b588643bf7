# Django models
from .order_model import OrderModel, OrderItemModel, OrderReceiptModel

__all__ = ['OrderModel', 'OrderItemModel', 'OrderReceiptModel']
