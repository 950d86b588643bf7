"""
Find one order use case.
"""
from dataclasses import dataclass
from uuid import UUID

from shared.application import UseCase, UseCaseResult
from ...domain.exceptions import OrderNotFoundError, ProductNotFoundError
from ...domain.gateways.product_catalog_gateway import ProductCatalogGateway
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import OrderDTO


@dataclass
class FindOneOrderUseCase(UseCase[UUID, OrderDTO]):
    """
    Use case for reading one order decorated with current product names.

    Names are fetched with a fresh catalog call on every read, since the
    catalog may have changed since the order was placed.
    """

    order_repository: OrderRepository
    product_catalog: ProductCatalogGateway

    def execute(self, input_dto: UUID) -> UseCaseResult[OrderDTO]:
        order = self.order_repository.find_by_id(input_dto)
        if order is None:
            raise OrderNotFoundError(str(input_dto))

        product_ids = order.product_ids
        products = self.product_catalog.validate(product_ids)

        missing = [product_id for product_id in product_ids if product_id not in products]
        if missing:
            raise ProductNotFoundError(missing)

        names = {product_id: product.name for product_id, product in products.items()}
        return UseCaseResult.ok(OrderDTO.from_entity(order, names))
