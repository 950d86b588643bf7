"""
Model registry entry point for the orders app.
"""
from .infrastructure.models import OrderModel, OrderItemModel, OrderReceiptModel  # noqa: F401
