"""
Product catalog gateway interface.
"""
from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..value_objects.catalog_product import CatalogProduct


class ProductCatalogGateway(ABC):
    """Access to the catalog service that owns product prices and names."""

    @abstractmethod
    def validate(self, product_ids: Sequence[str]) -> Dict[str, CatalogProduct]:
        """
        Resolve product ids to catalog records in a single remote call.

        The result is keyed by product id and may lack ids the catalog does
        not know; callers must check for missing entries.
        """
        pass
