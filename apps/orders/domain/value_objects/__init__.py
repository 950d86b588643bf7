# Value objects
from .order_status import OrderStatus
from .order_receipt import OrderReceipt
from .catalog_product import CatalogProduct

__all__ = ['OrderStatus', 'OrderReceipt', 'CatalogProduct']
