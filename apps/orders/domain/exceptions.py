"""
Order domain exceptions.
"""
from typing import Iterable

from shared.domain.exceptions import DomainException, EntityNotFoundError, ValidationError


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order is not found."""

    def __init__(self, identifier: str):
        super().__init__(
            entity_name="Order",
            entity_id=str(identifier),
            code="ORDER_NOT_FOUND",
        )
        self.identifier = str(identifier)


class ProductNotFoundError(DomainException):
    """Raised when the catalog response lacks one or more requested products."""

    def __init__(self, product_ids: Iterable[str]):
        self.product_ids = [str(product_id) for product_id in product_ids]
        super().__init__(
            message=f"Products not found: {', '.join(self.product_ids)}",
            code="PRODUCT_NOT_FOUND"
        )


class EmptyOrderError(ValidationError):
    """Raised when trying to place an order without items."""

    def __init__(self):
        super().__init__(message="Cannot place an order without items", field="items")


class InvalidQuantityError(ValidationError):
    """Raised when an order line quantity is not a positive integer."""

    def __init__(self, product_id: str, quantity):
        super().__init__(
            message=f"Quantity for product '{product_id}' must be a positive integer, got {quantity!r}",
            field="quantity",
        )
        self.product_id = product_id
        self.quantity = quantity
