"""
Create order use case.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult, dispatch_domain_events
from ...domain.entities.order import Order
from ...domain.exceptions import EmptyOrderError, ProductNotFoundError
from ...domain.gateways.product_catalog_gateway import ProductCatalogGateway
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import CreateOrderDTO, OrderDTO

logger = logging.getLogger(__name__)


@dataclass
class CreateOrderUseCase(UseCase[CreateOrderDTO, OrderDTO]):
    """Use case for validating, pricing and persisting a new order."""

    order_repository: OrderRepository
    product_catalog: ProductCatalogGateway

    def execute(self, input_dto: CreateOrderDTO) -> UseCaseResult[OrderDTO]:
        if not input_dto.items:
            raise EmptyOrderError()

        # One catalog call for all distinct products
        product_ids = list(dict.fromkeys(str(item.product_id) for item in input_dto.items))
        products = self.product_catalog.validate(product_ids)

        missing = [product_id for product_id in product_ids if product_id not in products]
        if missing:
            raise ProductNotFoundError(missing)

        order = Order.create(
            (
                str(item.product_id),
                products[str(item.product_id)].price,
                item.quantity,
            )
            for item in input_dto.items
        )

        saved_order = self.order_repository.create(order)
        dispatch_domain_events(order, logger)

        # Names come from the catalog reply already in hand
        names = {product_id: product.name for product_id, product in products.items()}
        return UseCaseResult.ok(OrderDTO.from_entity(saved_order, names))
