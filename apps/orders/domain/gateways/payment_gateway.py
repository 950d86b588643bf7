"""
Payment gateway interface.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence
from uuid import UUID


class PaymentGateway(ABC):
    """Access to the payment service."""

    @abstractmethod
    def create_session(
        self,
        order_id: UUID,
        currency: str,
        line_items: Sequence[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """Create a checkout session for the given order lines ({name, price, quantity})."""
        pass
