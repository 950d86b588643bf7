"""
Tests for the message codec, the remote service clients and the RabbitMQ consumer.
"""
import json
from decimal import Decimal
from unittest import mock
from uuid import uuid4

import pika
import pytest

from apps.orders.infrastructure.clients import (
    CREATE_PAYMENT_SESSION,
    VALIDATE_PRODUCTS,
    PaymentClient,
    ProductCatalogClient,
)
from conftest import FakeTransport
from shared.domain.exceptions import RemoteCallError, RemoteUnavailableError
from shared.infrastructure.messaging import codec
from shared.infrastructure.messaging.rabbitmq import RabbitMQConsumer, RabbitMQRpcClient


class TestCodec:

    def test_encode_handles_decimal_and_uuid(self):
        order_id = uuid4()

        body = codec.encode({'id': order_id, 'price': Decimal('10.50')})

        assert json.loads(body) == {'id': str(order_id), 'price': '10.50'}

    def test_unwrap_returns_data(self):
        assert codec.unwrap_reply(b'{"data": [1, 2]}', 'p') == [1, 2]

    def test_unwrap_raises_remote_error_with_status(self):
        body = codec.encode(codec.error_reply(404, 'Product missing'))

        with pytest.raises(RemoteCallError) as exc_info:
            codec.unwrap_reply(body, VALIDATE_PRODUCTS)

        assert exc_info.value.status == 404
        assert exc_info.value.message == 'Product missing'
        assert exc_info.value.pattern == VALIDATE_PRODUCTS

    def test_unwrap_error_without_status(self):
        with pytest.raises(RemoteCallError) as exc_info:
            codec.unwrap_reply(b'{"error": "boom"}', 'p')

        assert exc_info.value.status is None
        assert exc_info.value.message == 'boom'

    @pytest.mark.parametrize('body', [b'not json', b'[1, 2]', b'{"other": 1}'])
    def test_unwrap_rejects_malformed_replies(self, body):
        with pytest.raises(RemoteCallError):
            codec.unwrap_reply(body, 'p')


class TestProductCatalogClient:

    def test_validate_sends_ids_once_and_indexes_reply(self):
        transport = FakeTransport({
            VALIDATE_PRODUCTS: [
                {'id': 1, 'price': 10.0, 'name': 'Widget'},
                {'id': '2', 'price': '2.50', 'name': 'Gadget'},
            ],
        })

        products = ProductCatalogClient(transport).validate(['1', '2', '3'])

        assert transport.sent == [(VALIDATE_PRODUCTS, ['1', '2', '3'])]
        assert set(products) == {'1', '2'}
        assert products['1'].price == Decimal('10.0')
        assert products['2'].name == 'Gadget'

    def test_validate_rejects_non_list_reply(self):
        transport = FakeTransport({VALIDATE_PRODUCTS: {'id': 1}})

        with pytest.raises(RemoteCallError):
            ProductCatalogClient(transport).validate(['1'])

    def test_validate_rejects_malformed_record(self):
        transport = FakeTransport({VALIDATE_PRODUCTS: [{'id': 1, 'name': 'Widget'}]})

        with pytest.raises(RemoteCallError):
            ProductCatalogClient(transport).validate(['1'])

    def test_validate_propagates_transport_errors(self):
        transport = FakeTransport({VALIDATE_PRODUCTS: RemoteUnavailableError('down')})

        with pytest.raises(RemoteUnavailableError):
            ProductCatalogClient(transport).validate(['1'])


class TestPaymentClient:

    def test_create_session_payload_and_verbatim_reply(self):
        order_id = uuid4()
        session = {'url': 'https://checkout.test/s', 'anything': [1]}
        transport = FakeTransport({CREATE_PAYMENT_SESSION: session})

        reply = PaymentClient(transport).create_session(
            order_id=order_id,
            currency='usd',
            line_items=[{'name': 'Widget', 'price': Decimal('10.00'), 'quantity': 2}],
        )

        assert reply == session
        assert transport.sent == [(
            CREATE_PAYMENT_SESSION,
            {
                'orderId': str(order_id),
                'currency': 'usd',
                'items': [{'name': 'Widget', 'price': Decimal('10.00'), 'quantity': 2}],
            },
        )]

    def test_prices_travel_as_decimal_strings(self):
        transport = FakeTransport({CREATE_PAYMENT_SESSION: {}})

        PaymentClient(transport).create_session(
            order_id=uuid4(),
            currency='usd',
            line_items=[{'name': 'Clip', 'price': Decimal('0.34'), 'quantity': 3}],
        )

        _, payload = transport.sent[0]
        assert json.loads(codec.encode(payload))['items'][0]['price'] == '0.34'


class TestRabbitMQRpcClient:

    def test_unreachable_broker_is_reported_unavailable(self, monkeypatch):
        def refuse(params):
            raise pika.exceptions.AMQPConnectionError('refused')

        monkeypatch.setattr(pika, 'BlockingConnection', refuse)

        with pytest.raises(RemoteUnavailableError) as exc_info:
            RabbitMQRpcClient(timeout=0.1).send(VALIDATE_PRODUCTS, ['1'])

        assert exc_info.value.status == 503

    def _client(self, monkeypatch, timeout=0.05):
        connection = mock.Mock(is_open=True)
        channel = connection.channel.return_value
        channel.queue_declare.return_value.method.queue = 'amq.gen-reply'
        monkeypatch.setattr(pika, 'BlockingConnection', lambda params: connection)
        return RabbitMQRpcClient(timeout=timeout), connection, channel

    def _correlation_id(self, channel):
        return channel.basic_publish.call_args.kwargs['properties'].correlation_id

    def test_reply_is_matched_by_correlation_id(self, monkeypatch):
        client, connection, channel = self._client(monkeypatch, timeout=1.0)

        def deliver(time_limit):
            properties = pika.BasicProperties(correlation_id=self._correlation_id(channel))
            client._on_reply(channel, None, properties, codec.encode({'data': ['ok']}))

        connection.process_data_events.side_effect = deliver

        assert client.send(VALIDATE_PRODUCTS, ['1']) == ['ok']
        kwargs = channel.basic_publish.call_args.kwargs
        assert kwargs['routing_key'] == VALIDATE_PRODUCTS
        assert kwargs['properties'].reply_to == 'amq.gen-reply'

    def test_no_reply_within_timeout_is_reported_unavailable(self, monkeypatch):
        client, connection, channel = self._client(monkeypatch)

        with pytest.raises(RemoteUnavailableError) as exc_info:
            client.send(VALIDATE_PRODUCTS, ['1'])

        assert exc_info.value.status == 503
        assert exc_info.value.pattern == VALIDATE_PRODUCTS
        assert connection.process_data_events.called

    def test_reply_arriving_after_timeout_is_dropped(self, monkeypatch):
        client, connection, channel = self._client(monkeypatch)

        with pytest.raises(RemoteUnavailableError):
            client.send(VALIDATE_PRODUCTS, ['1'])
        late = pika.BasicProperties(correlation_id=self._correlation_id(channel))
        client._on_reply(channel, None, late, codec.encode({'data': []}))

        assert client._pending == set()
        assert client._responses == {}

    def test_unknown_correlation_id_is_dropped(self, monkeypatch):
        client, _, channel = self._client(monkeypatch)

        client._on_reply(channel, None, pika.BasicProperties(correlation_id='stale'), b'{}')

        assert client._responses == {}


def _delivery(pattern, body, reply_to='amq.gen-reply', correlation_id='c-1'):
    method = mock.Mock(routing_key=pattern, delivery_tag=7)
    properties = pika.BasicProperties(reply_to=reply_to, correlation_id=correlation_id)
    return method, properties, body


class TestRabbitMQConsumer:

    def _consumer(self, commands=None, events=None):
        return RabbitMQConsumer(
            queue='orders.commands',
            command_handlers=commands or {},
            event_handlers=events or {},
        )

    def _published(self, channel):
        kwargs = channel.basic_publish.call_args.kwargs
        return kwargs['routing_key'], kwargs['properties'].correlation_id, json.loads(kwargs['body'])

    def test_command_reply_goes_to_reply_to_with_correlation_id(self):
        handler = mock.Mock(return_value={'data': {'ok': True}})
        consumer = self._consumer(commands={'find_one_order': handler})
        channel = mock.Mock()

        consumer._on_message(channel, *_delivery('find_one_order', b'{"id": "x"}'))

        handler.assert_called_once_with({'id': 'x'})
        assert self._published(channel) == ('amq.gen-reply', 'c-1', {'data': {'ok': True}})
        channel.basic_ack.assert_called_once_with(delivery_tag=7)

    def test_event_is_acked_without_reply(self):
        handler = mock.Mock(return_value={'error': {'status': 404, 'message': 'gone'}})
        consumer = self._consumer(events={'payment.succeeded': handler})
        channel = mock.Mock()

        consumer._on_message(channel, *_delivery('payment.succeeded', b'{}', reply_to=None))

        handler.assert_called_once_with({})
        channel.basic_publish.assert_not_called()
        channel.basic_ack.assert_called_once_with(delivery_tag=7)

    def test_malformed_body_is_rejected_with_error_reply(self):
        handler = mock.Mock()
        consumer = self._consumer(commands={'create_order': handler})
        channel = mock.Mock()

        consumer._on_message(channel, *_delivery('create_order', b'{broken'))

        handler.assert_not_called()
        _, _, envelope = self._published(channel)
        assert envelope['error']['status'] == 400
        channel.basic_nack.assert_called_once_with(delivery_tag=7, requeue=False)

    def test_unknown_pattern_is_rejected(self):
        consumer = self._consumer()
        channel = mock.Mock()

        consumer._on_message(channel, *_delivery('unknown', b'{}'))

        _, _, envelope = self._published(channel)
        assert envelope['error']['status'] == 404
        channel.basic_nack.assert_called_once_with(delivery_tag=7, requeue=False)
