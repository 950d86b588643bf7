# Remote service clients
from .product_catalog_client import ProductCatalogClient, VALIDATE_PRODUCTS
from .payment_client import PaymentClient, CREATE_PAYMENT_SESSION

__all__ = [
    'ProductCatalogClient',
    'PaymentClient',
    'VALIDATE_PRODUCTS',
    'CREATE_PAYMENT_SESSION',
]
