"""
Mark order paid use case.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult, dispatch_domain_events
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import OrderDTO, PaidOrderDTO

logger = logging.getLogger(__name__)


@dataclass
class MarkOrderPaidUseCase(UseCase[PaidOrderDTO, OrderDTO]):
    """
    Use case reacting to a payment confirmation.

    Delivery is assumed at-least-once and nothing guards against repeats:
    a second confirmation re-applies the paid fields and replaces the
    receipt URL on the order's single receipt.
    """

    order_repository: OrderRepository

    def execute(self, input_dto: PaidOrderDTO) -> UseCaseResult[OrderDTO]:
        order = self.order_repository.mark_paid(
            order_id=input_dto.order_id,
            external_charge_id=input_dto.stripe_payment_id,
            receipt_url=input_dto.receipt_url,
        )
        dispatch_domain_events(order, logger)
        return UseCaseResult.ok(OrderDTO.from_entity(order))
