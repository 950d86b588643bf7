# Gateway interfaces
from .product_catalog_gateway import ProductCatalogGateway
from .payment_gateway import PaymentGateway

__all__ = ['ProductCatalogGateway', 'PaymentGateway']
