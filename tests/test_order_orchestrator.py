"""
Tests for the order orchestrator against the Django order store.
"""
from decimal import Decimal
from uuid import uuid4

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from apps.orders.application.dtos import (
    ChangeOrderStatusDTO,
    CreateOrderDTO,
    OrderItemInputDTO,
    OrderPaginationDTO,
    PaidOrderDTO,
)
from apps.orders.domain.value_objects.catalog_product import CatalogProduct
from apps.orders.domain.value_objects.order_status import OrderStatus
from apps.orders.infrastructure.models import OrderModel, OrderReceiptModel
from shared.domain.exceptions import RemoteCallError, RemoteUnavailableError

pytestmark = pytest.mark.django_db


def _items(*lines):
    return CreateOrderDTO(items=[OrderItemInputDTO(product_id=p, quantity=q) for p, q in lines])


def _place(orchestrator, *lines):
    result = orchestrator.create(_items(*(lines or [('1', 1)])))
    assert result.success, result.error
    return result.data


class TestCreate:

    def test_widget_order(self, orchestrator, catalog):
        order = _place(orchestrator, ('1', 2))

        assert order.total_amount == Decimal('20.00')
        assert order.total_items == 2
        assert order.items[0].name == 'Widget'
        assert order.status == OrderStatus.PENDING
        assert catalog.calls == [['1']]

    def test_totals_sum_every_line(self, orchestrator, catalog):
        order = _place(orchestrator, ('1', 2), ('2', 3), ('1', 1))

        assert order.total_amount == Decimal('37.50')
        assert order.total_items == 6
        assert [item.name for item in order.items] == ['Widget', 'Gadget', 'Widget']
        # one remote call with distinct ids
        assert catalog.calls == [['1', '2']]

    def test_prices_are_snapshotted(self, orchestrator, catalog):
        order = _place(orchestrator, ('1', 1))
        catalog.add(CatalogProduct(id='1', price=Decimal('99.00'), name='Widget v2'))

        found = orchestrator.find_one(order.id).data

        assert found.items[0].price == Decimal('10.00')
        assert found.items[0].name == 'Widget v2'
        assert found.total_amount == Decimal('10.00')

    def test_missing_product_persists_nothing(self, orchestrator):
        result = orchestrator.create(_items(('1', 1), ('9', 1), ('8', 2)))

        assert not result.success
        assert result.error_code == 'PRODUCT_NOT_FOUND'
        assert result.status == 400
        assert '9' in result.error and '8' in result.error
        assert orchestrator.find_all(OrderPaginationDTO()).data.meta.total == 0
        assert OrderModel.objects.count() == 0

    def test_catalog_unavailable(self, orchestrator, catalog):
        catalog.error = RemoteUnavailableError('No reply', pattern='validate_products')

        result = orchestrator.create(_items(('1', 1)))

        assert not result.success
        assert result.status == 503
        assert OrderModel.objects.count() == 0

    def test_remote_error_status_is_kept(self, orchestrator, catalog):
        catalog.error = RemoteCallError('Product 1 is discontinued', status=404)

        result = orchestrator.create(_items(('1', 1)))

        assert result.status == 404
        assert result.error == 'Product 1 is discontinued'

    def test_sub_cent_price_keeps_lines_and_total_consistent(self, orchestrator, catalog, payments):
        catalog.add(CatalogProduct(id='3', price=Decimal('0.335'), name='Clip'))
        order = _place(orchestrator, ('3', 3))

        found = orchestrator.find_one(order.id).data
        line_sum = sum(item.price * item.quantity for item in found.items)

        assert found.items[0].price == Decimal('0.34')
        assert found.total_amount == Decimal('1.02')
        assert line_sum == found.total_amount

        orchestrator.create_payment_session(found)
        session_lines = payments.sessions[0]['line_items']
        assert sum(line['price'] * line['quantity'] for line in session_lines) == found.total_amount


class TestFindAll:

    def test_pagination_meta(self, orchestrator):
        for _ in range(5):
            _place(orchestrator)

        page = orchestrator.find_all(OrderPaginationDTO(page=1, limit=2)).data

        assert len(page.data) == 2
        assert (page.meta.total, page.meta.page, page.meta.last_page) == (5, 1, 3)

    def test_last_page_and_newest_first(self, orchestrator):
        placed = [_place(orchestrator) for _ in range(5)]

        page = orchestrator.find_all(OrderPaginationDTO(page=3, limit=2)).data

        assert [order.id for order in page.data] == [placed[0].id]
        assert page.data[0].items == []

    def test_status_filter(self, orchestrator):
        first = _place(orchestrator)
        _place(orchestrator)
        orchestrator.change_status(ChangeOrderStatusDTO(id=first.id, status=OrderStatus.CANCELLED))

        page = orchestrator.find_all(OrderPaginationDTO(status=OrderStatus.CANCELLED)).data

        assert [order.id for order in page.data] == [first.id]
        assert page.meta.total == 1

    def test_empty_store(self, orchestrator):
        meta = orchestrator.find_all(OrderPaginationDTO()).data.meta

        assert (meta.total, meta.page, meta.last_page) == (0, 1, 0)


class TestFindOne:

    def test_unknown_order_is_404(self, orchestrator):
        result = orchestrator.find_one(uuid4())

        assert not result.success
        assert result.status == 404
        assert result.error_code == 'ORDER_NOT_FOUND'

    def test_product_gone_from_catalog(self, orchestrator, catalog):
        order = _place(orchestrator, ('1', 1), ('2', 1))
        del catalog.products['2']

        result = orchestrator.find_one(order.id)

        assert result.error_code == 'PRODUCT_NOT_FOUND'
        # the order itself stays stored
        assert OrderModel.objects.filter(id=order.id).exists()


class TestChangeStatus:

    def test_same_status_returns_decorated_order_without_write(self, orchestrator):
        order = _place(orchestrator, ('1', 2))
        before = OrderModel.objects.get(id=order.id).updated_at

        result = orchestrator.change_status(
            ChangeOrderStatusDTO(id=order.id, status=OrderStatus.PENDING)
        )

        assert result.success
        assert result.data.status == OrderStatus.PENDING
        assert result.data.items[0].name == 'Widget'
        assert OrderModel.objects.get(id=order.id).updated_at == before

    def test_same_status_twice_is_identical_and_issues_no_update(self, orchestrator):
        order = _place(orchestrator, ('1', 2))
        dto = ChangeOrderStatusDTO(id=order.id, status=OrderStatus.PENDING)

        with CaptureQueriesContext(connection) as queries:
            first = orchestrator.change_status(dto)
            second = orchestrator.change_status(dto)

        assert first.data.to_dict() == second.data.to_dict()
        writes = [
            query['sql'] for query in queries.captured_queries
            if query['sql'].lstrip().upper().startswith(('UPDATE', 'INSERT', 'DELETE'))
        ]
        assert writes == []

    def test_new_status_is_persisted_and_undecorated(self, orchestrator):
        order = _place(orchestrator, ('1', 2))

        result = orchestrator.change_status(
            ChangeOrderStatusDTO(id=order.id, status=OrderStatus.DELIVERED)
        )

        assert result.data.status == OrderStatus.DELIVERED
        assert [item.name for item in result.data.items] == [None]
        assert OrderModel.objects.get(id=order.id).status == 'DELIVERED'

    def test_terminal_status_may_be_left(self, orchestrator):
        order = _place(orchestrator)
        for status in (OrderStatus.CANCELLED, OrderStatus.CONFIRMED):
            orchestrator.change_status(ChangeOrderStatusDTO(id=order.id, status=status))

        assert OrderModel.objects.get(id=order.id).status == 'CONFIRMED'

    def test_unknown_order(self, orchestrator):
        result = orchestrator.change_status(
            ChangeOrderStatusDTO(id=uuid4(), status=OrderStatus.PAID)
        )

        assert result.status == 404


class TestPayment:

    def test_session_uses_decorated_lines_and_currency(self, orchestrator, payments):
        order = _place(orchestrator, ('1', 2), ('2', 1))
        decorated = orchestrator.find_one(order.id).data

        result = orchestrator.create_payment_session(decorated)

        assert result.data['orderId'] == str(order.id)
        assert payments.sessions == [{
            'order_id': order.id,
            'currency': 'usd',
            'line_items': [
                {'name': 'Widget', 'price': Decimal('10.00'), 'quantity': 2},
                {'name': 'Gadget', 'price': Decimal('2.50'), 'quantity': 1},
            ],
        }]
        assert OrderModel.objects.get(id=order.id).status == 'PENDING'

    def test_paid_order(self, orchestrator):
        order = _place(orchestrator)

        result = orchestrator.paid_order(PaidOrderDTO(
            order_id=order.id,
            stripe_payment_id='ch_1',
            receipt_url='https://receipts.test/1',
        ))

        assert result.success
        assert result.data.status == OrderStatus.PAID
        assert result.data.paid is True
        assert result.data.paid_at is not None
        assert result.data.receipt_url == 'https://receipts.test/1'
        stored = OrderModel.objects.get(id=order.id)
        assert stored.paid and stored.external_charge_id == 'ch_1'
        assert OrderReceiptModel.objects.filter(order_id=order.id).count() == 1

    def test_repeated_payment_keeps_one_receipt(self, orchestrator):
        order = _place(orchestrator)
        for charge in ('ch_1', 'ch_2'):
            orchestrator.paid_order(PaidOrderDTO(
                order_id=order.id,
                stripe_payment_id=charge,
                receipt_url=f'https://receipts.test/{charge}',
            ))

        receipts = OrderReceiptModel.objects.filter(order_id=order.id)
        assert receipts.count() == 1
        assert receipts.get().receipt_url == 'https://receipts.test/ch_2'
        assert OrderModel.objects.get(id=order.id).external_charge_id == 'ch_2'
        assert orchestrator.find_one(order.id).data.receipt_url == 'https://receipts.test/ch_2'

    def test_payment_for_unknown_order(self, orchestrator):
        result = orchestrator.paid_order(PaidOrderDTO(
            order_id=uuid4(),
            stripe_payment_id='ch_1',
            receipt_url='https://receipts.test/1',
        ))

        assert result.status == 404
        assert OrderReceiptModel.objects.count() == 0
