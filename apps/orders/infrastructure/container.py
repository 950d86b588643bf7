"""
Wiring of the orders core with its Django and messaging collaborators.
"""
from typing import Optional

from shared.infrastructure.messaging import MessageTransport
from shared.infrastructure.messaging.rabbitmq import RabbitMQRpcClient
from ..application.services.order_orchestrator import OrderOrchestrator
from .clients.payment_client import PaymentClient
from .clients.product_catalog_client import ProductCatalogClient
from .repositories.django_order_repository import DjangoOrderRepository


def build_order_orchestrator(
    transport: Optional[MessageTransport] = None,
    currency: Optional[str] = None,
) -> OrderOrchestrator:
    """Create an orchestrator backed by the Django store and the given transport."""
    transport = transport or RabbitMQRpcClient()
    return OrderOrchestrator(
        order_repository=DjangoOrderRepository(),
        product_catalog=ProductCatalogClient(transport),
        payment_gateway=PaymentClient(transport),
        currency=currency,
    )
