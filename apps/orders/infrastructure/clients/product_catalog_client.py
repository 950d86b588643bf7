"""
Product catalog client over the message transport.
"""
import logging
from decimal import InvalidOperation
from typing import Dict, Sequence

from shared.domain.exceptions import RemoteCallError
from shared.infrastructure.messaging import MessageTransport
from ...domain.gateways.product_catalog_gateway import ProductCatalogGateway
from ...domain.value_objects.catalog_product import CatalogProduct

logger = logging.getLogger(__name__)

VALIDATE_PRODUCTS = 'validate_products'


class ProductCatalogClient(ProductCatalogGateway):
    """Resolves product ids through one validate_products request."""

    def __init__(self, transport: MessageTransport):
        self.transport = transport

    def validate(self, product_ids: Sequence[str]) -> Dict[str, CatalogProduct]:
        product_ids = [str(product_id) for product_id in product_ids]
        reply = self.transport.send(VALIDATE_PRODUCTS, product_ids)

        if not isinstance(reply, list):
            raise RemoteCallError(
                f"Unexpected reply to '{VALIDATE_PRODUCTS}': expected a list",
                pattern=VALIDATE_PRODUCTS,
            )

        products = {}
        for record in reply:
            try:
                product = CatalogProduct(
                    id=record['id'],
                    price=record['price'],
                    name=record['name'],
                )
            except (KeyError, TypeError, InvalidOperation) as e:
                raise RemoteCallError(
                    f"Malformed product record in '{VALIDATE_PRODUCTS}' reply: {record!r}",
                    pattern=VALIDATE_PRODUCTS,
                ) from e
            products[product.id] = product

        logger.debug(f"Catalog resolved {len(products)}/{len(product_ids)} products")
        return products
