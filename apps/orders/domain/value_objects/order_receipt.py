"""
Order receipt value object.
"""
from dataclasses import dataclass

from shared.domain import ValueObject


@dataclass(frozen=True)
class OrderReceipt(ValueObject):
    """Receipt recorded when the payment service confirms an order."""
    receipt_url: str
