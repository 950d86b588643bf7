"""
Change order status use case.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult, dispatch_domain_events
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import ChangeOrderStatusDTO, OrderDTO
from .find_one_order import FindOneOrderUseCase

logger = logging.getLogger(__name__)


@dataclass
class ChangeOrderStatusUseCase(UseCase[ChangeOrderStatusDTO, OrderDTO]):
    """
    Use case for overwriting an order's status.

    An unchanged status returns the decorated order without writing. A real
    change returns the updated order undecorated: item names are None.
    """

    order_repository: OrderRepository
    find_one_order: FindOneOrderUseCase

    def execute(self, input_dto: ChangeOrderStatusDTO) -> UseCaseResult[OrderDTO]:
        current = self.find_one_order.execute(input_dto.id).data

        if current.status == input_dto.status:
            return UseCaseResult.ok(current)

        order = self.order_repository.update_status(input_dto.id, input_dto.status)
        dispatch_domain_events(order, logger)
        return UseCaseResult.ok(OrderDTO.from_entity(order))
