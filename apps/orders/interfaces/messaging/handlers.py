"""
Orders message handlers.

Each handler validates an inbound payload, calls the orchestrator and returns
a reply envelope: {'data': ...} or {'error': {'status', 'message'}}.
"""
import logging
from typing import Any, Callable, Dict, Type

from rest_framework import serializers

from shared.application import UseCaseResult
from shared.infrastructure.messaging.codec import success_reply
from shared.interfaces.exception_handlers import (
    exception_payload,
    result_payload,
    validation_payload,
)
from ...application.services.order_orchestrator import OrderOrchestrator
from ..serializers.order_serializer import (
    ChangeOrderStatusSerializer,
    CreateOrderSerializer,
    OrderIdSerializer,
    OrderPaginationSerializer,
    PaidOrderSerializer,
)

logger = logging.getLogger(__name__)

CREATE_ORDER = 'create_order'
FIND_ALL_ORDERS = 'find_all_orders'
FIND_ONE_ORDER = 'find_one_order'
CHANGE_ORDER_STATUS = 'change_order_status'
CREATE_PAYMENT_SESSION = 'create_payment_session'
PAYMENT_SUCCEEDED = 'payment.succeeded'


def _error_reply(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {'error': payload}


class OrderMessageHandlers:
    """Binds message patterns to orchestrator operations."""

    def __init__(self, orchestrator: OrderOrchestrator):
        self.orchestrator = orchestrator

    @property
    def command_handlers(self) -> Dict[str, Callable[[Any], Dict[str, Any]]]:
        return {
            CREATE_ORDER: self.create_order,
            FIND_ALL_ORDERS: self.find_all_orders,
            FIND_ONE_ORDER: self.find_one_order,
            CHANGE_ORDER_STATUS: self.change_order_status,
            CREATE_PAYMENT_SESSION: self.create_payment_session,
        }

    @property
    def event_handlers(self) -> Dict[str, Callable[[Any], Dict[str, Any]]]:
        return {
            PAYMENT_SUCCEEDED: self.order_paid,
        }

    def create_order(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            CREATE_ORDER,
            CreateOrderSerializer,
            payload,
            lambda dto: self._reply(self.orchestrator.create(dto), lambda order: order.to_dict()),
        )

    def find_all_orders(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            FIND_ALL_ORDERS,
            OrderPaginationSerializer,
            payload or {},
            lambda dto: self._reply(self.orchestrator.find_all(dto), lambda page: page.to_dict()),
        )

    def find_one_order(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            FIND_ONE_ORDER,
            OrderIdSerializer,
            payload,
            lambda order_id: self._reply(
                self.orchestrator.find_one(order_id), lambda order: order.to_dict()
            ),
        )

    def change_order_status(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            CHANGE_ORDER_STATUS,
            ChangeOrderStatusSerializer,
            payload,
            lambda dto: self._reply(
                self.orchestrator.change_status(dto), lambda order: order.to_dict()
            ),
        )

    def create_payment_session(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            CREATE_PAYMENT_SESSION,
            OrderIdSerializer,
            payload,
            self._open_payment_session,
        )

    def order_paid(self, payload: Any) -> Dict[str, Any]:
        return self._handle(
            PAYMENT_SUCCEEDED,
            PaidOrderSerializer,
            payload,
            lambda dto: self._reply(
                self.orchestrator.paid_order(dto), lambda order: order.to_dict()
            ),
        )

    def _open_payment_session(self, order_id) -> Dict[str, Any]:
        # The session is priced from the stored, decorated order lines
        found = self.orchestrator.find_one(order_id)
        if not found.success:
            return _error_reply(result_payload(found))
        return self._reply(
            self.orchestrator.create_payment_session(found.data),
            lambda session: session,
        )

    @staticmethod
    def _reply(result: UseCaseResult, render: Callable[[Any], Any]) -> Dict[str, Any]:
        if not result.success:
            return _error_reply(result_payload(result))
        return success_reply(render(result.data))

    @staticmethod
    def _handle(
        pattern: str,
        serializer_class: Type[serializers.Serializer],
        payload: Any,
        action: Callable[[Any], Dict[str, Any]],
    ) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            return _error_reply(validation_payload({'payload': ['Expected an object.']}))

        serializer = serializer_class(data=payload)
        if not serializer.is_valid():
            logger.info(f"Rejected '{pattern}' payload: {serializer.errors}")
            return _error_reply(validation_payload(serializer.errors))

        try:
            return action(serializer.to_dto())
        except Exception as e:
            logger.error(f"Unhandled error while handling '{pattern}': {str(e)}", exc_info=True)
            return _error_reply(exception_payload(e))
