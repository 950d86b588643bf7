"""
Catalog product value object.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from shared.domain import ValueObject

# Prices are stored with two decimal places
PRICE_QUANTUM = Decimal('0.01')


def quantize_price(value) -> Decimal:
    """Round a price to the stored precision."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CatalogProduct(ValueObject):
    """Price and name of a product as reported by the catalog service."""
    id: str
    price: Decimal
    name: str

    def __post_init__(self):
        # Catalog ids may arrive as numbers; compare them as strings
        object.__setattr__(self, 'id', str(self.id))
        object.__setattr__(self, 'price', quantize_price(self.price))
