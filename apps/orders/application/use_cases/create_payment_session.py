"""
Create payment session use case.
"""
from dataclasses import dataclass
from typing import Any, Dict

from shared.application import UseCase, UseCaseResult
from ...domain.gateways.payment_gateway import PaymentGateway
from ..dtos.order_dto import OrderDTO


@dataclass
class CreatePaymentSessionUseCase(UseCase[OrderDTO, Dict[str, Any]]):
    """Use case for opening a checkout session for a decorated order. No local state change."""

    payment_gateway: PaymentGateway
    currency: str

    def execute(self, input_dto: OrderDTO) -> UseCaseResult[Dict[str, Any]]:
        session = self.payment_gateway.create_session(
            order_id=input_dto.id,
            currency=self.currency,
            line_items=input_dto.line_items,
        )
        return UseCaseResult.ok(session)
