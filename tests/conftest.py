"""
Pytest configuration and fixtures.
"""
from decimal import Decimal

import pytest

from apps.orders.application.services.order_orchestrator import OrderOrchestrator
from apps.orders.domain.gateways.payment_gateway import PaymentGateway
from apps.orders.domain.gateways.product_catalog_gateway import ProductCatalogGateway
from apps.orders.domain.value_objects.catalog_product import CatalogProduct
from shared.infrastructure.messaging import MessageTransport


class FakeTransport(MessageTransport):
    """Records every request and answers from scripted replies per pattern."""

    def __init__(self, replies=None):
        self.replies = dict(replies or {})
        self.sent = []

    def send(self, pattern, payload):
        self.sent.append((pattern, payload))
        reply = self.replies[pattern]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(payload)
        return reply


class FakeProductCatalog(ProductCatalogGateway):
    """In-memory catalog. Unknown ids are left out of the reply."""

    def __init__(self, products=None):
        self.products = {}
        self.calls = []
        self.error = None
        for product in products or []:
            self.add(product)

    def add(self, product: CatalogProduct) -> None:
        self.products[product.id] = product

    def validate(self, product_ids):
        self.calls.append(list(product_ids))
        if self.error is not None:
            raise self.error
        return {
            product_id: self.products[product_id]
            for product_id in product_ids
            if product_id in self.products
        }


class FakePaymentGateway(PaymentGateway):
    def __init__(self):
        self.sessions = []
        self.error = None

    def create_session(self, order_id, currency, line_items):
        if self.error is not None:
            raise self.error
        self.sessions.append({
            'order_id': order_id,
            'currency': currency,
            'line_items': list(line_items),
        })
        return {'url': f'https://checkout.test/{order_id}', 'orderId': str(order_id)}


@pytest.fixture
def widget():
    return CatalogProduct(id='1', price=Decimal('10.00'), name='Widget')


@pytest.fixture
def gadget():
    return CatalogProduct(id='2', price=Decimal('2.50'), name='Gadget')


@pytest.fixture
def catalog(widget, gadget):
    return FakeProductCatalog([widget, gadget])


@pytest.fixture
def payments():
    return FakePaymentGateway()


@pytest.fixture
def order_repository():
    from apps.orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
    return DjangoOrderRepository()


@pytest.fixture
def orchestrator(order_repository, catalog, payments):
    return OrderOrchestrator(
        order_repository=order_repository,
        product_catalog=catalog,
        payment_gateway=payments,
        currency='usd',
    )
