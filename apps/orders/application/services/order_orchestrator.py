"""
Order orchestrator.

Entry point of the orders core: every operation returns a UseCaseResult.
Domain failures raised by the use cases (unknown order, missing products,
remote and persistence errors) come back as failed results carrying an
error code and status. Nothing is retried or compensated.
"""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from django.conf import settings

from shared.application import UseCase, UseCaseResult
from shared.domain.exceptions import DomainException
from ...domain.gateways.payment_gateway import PaymentGateway
from ...domain.gateways.product_catalog_gateway import ProductCatalogGateway
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import (
    ChangeOrderStatusDTO,
    CreateOrderDTO,
    OrderDTO,
    OrderPageDTO,
    OrderPaginationDTO,
    PaidOrderDTO,
)
from ..use_cases import (
    ChangeOrderStatusUseCase,
    CreateOrderUseCase,
    CreatePaymentSessionUseCase,
    FindAllOrdersUseCase,
    FindOneOrderUseCase,
    MarkOrderPaidUseCase,
)

logger = logging.getLogger(__name__)


class OrderOrchestrator:
    """Coordinates the catalog, the payment service and the order store."""

    def __init__(
        self,
        order_repository: OrderRepository,
        product_catalog: ProductCatalogGateway,
        payment_gateway: PaymentGateway,
        currency: Optional[str] = None,
    ):
        self.order_repository = order_repository
        self.product_catalog = product_catalog
        self.payment_gateway = payment_gateway
        self.currency = currency or settings.ORDERS_CURRENCY

        self._create_order = CreateOrderUseCase(order_repository, product_catalog)
        self._find_all_orders = FindAllOrdersUseCase(order_repository)
        self._find_one_order = FindOneOrderUseCase(order_repository, product_catalog)
        self._change_order_status = ChangeOrderStatusUseCase(order_repository, self._find_one_order)
        self._create_payment_session = CreatePaymentSessionUseCase(payment_gateway, self.currency)
        self._mark_order_paid = MarkOrderPaidUseCase(order_repository)

    def create(self, dto: CreateOrderDTO) -> UseCaseResult[OrderDTO]:
        return self._run('create', self._create_order, dto)

    def find_all(self, dto: OrderPaginationDTO) -> UseCaseResult[OrderPageDTO]:
        return self._run('find_all', self._find_all_orders, dto)

    def find_one(self, order_id: UUID) -> UseCaseResult[OrderDTO]:
        return self._run('find_one', self._find_one_order, order_id)

    def change_status(self, dto: ChangeOrderStatusDTO) -> UseCaseResult[OrderDTO]:
        return self._run('change_status', self._change_order_status, dto)

    def create_payment_session(self, order: OrderDTO) -> UseCaseResult[Dict[str, Any]]:
        return self._run('create_payment_session', self._create_payment_session, order)

    def paid_order(self, dto: PaidOrderDTO) -> UseCaseResult[OrderDTO]:
        logger.info(f"Order paid: {dto.order_id}")
        return self._run('paid_order', self._mark_order_paid, dto)

    @staticmethod
    def _run(operation: str, use_case: UseCase, input_dto) -> UseCaseResult:
        try:
            return use_case.execute(input_dto)
        except DomainException as e:
            logger.warning(f"{operation} failed: [{e.code}] {e.message}")
            return UseCaseResult.from_exception(e)
