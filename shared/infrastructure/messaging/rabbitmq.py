"""
RabbitMQ request/reply transport and consumer built on pika.
"""
import logging
import threading
import time
import uuid
from typing import Any, Callable, Dict, Optional

import pika
from django.conf import settings

from shared.domain.exceptions import RemoteUnavailableError
from . import codec
from .transport import MessageTransport

logger = logging.getLogger(__name__)

EXCHANGE_TYPE = "topic"

Handler = Callable[[Any], Dict[str, Any]]


def build_connection_parameters() -> pika.ConnectionParameters:
    """Connection parameters from the RABBITMQ_* settings."""
    credentials = pika.PlainCredentials(settings.RABBITMQ_USER, settings.RABBITMQ_PASSWORD)
    return pika.ConnectionParameters(
        host=settings.RABBITMQ_HOST,
        port=settings.RABBITMQ_PORT,
        virtual_host=settings.RABBITMQ_VHOST,
        credentials=credentials,
    )


def connect_with_retry(
    params: Optional[pika.ConnectionParameters] = None,
    max_retries: int = 15,
    delay: float = 2,
) -> pika.BlockingConnection:
    """Open a blocking connection, retrying while the broker starts up."""
    params = params or build_connection_parameters()
    for attempt in range(1, max_retries + 1):
        try:
            return pika.BlockingConnection(params)
        except pika.exceptions.AMQPConnectionError:
            logger.warning(f"RabbitMQ not ready, retry {attempt}/{max_retries}")
            time.sleep(delay)
    raise RuntimeError("Could not connect to RabbitMQ")


class RabbitMQRpcClient(MessageTransport):
    """
    Request/reply over a topic exchange.

    Each request is published with the pattern as routing key, a private
    reply queue in reply_to and a fresh correlation_id. The caller blocks
    until the matching reply arrives or the timeout expires.
    """

    def __init__(
        self,
        params: Optional[pika.ConnectionParameters] = None,
        exchange: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.params = params or build_connection_parameters()
        self.exchange = exchange or settings.MESSAGING_EXCHANGE
        self.timeout = timeout if timeout is not None else settings.MESSAGING_RPC_TIMEOUT
        self.connection = None
        self.channel = None
        self.callback_queue = None
        self._pending = set()
        self._responses: Dict[str, bytes] = {}
        # BlockingConnection is not thread safe
        self._lock = threading.Lock()

    def _ensure_connection(self) -> None:
        if self.connection is not None and self.connection.is_open:
            return
        try:
            self.connection = pika.BlockingConnection(self.params)
        except pika.exceptions.AMQPConnectionError as exc:
            raise RemoteUnavailableError(f"Message broker unreachable: {exc}") from exc

        self.channel = self.connection.channel()
        self.channel.exchange_declare(
            exchange=self.exchange, exchange_type=EXCHANGE_TYPE, durable=True
        )
        result = self.channel.queue_declare(queue="", exclusive=True)
        self.callback_queue = result.method.queue
        self.channel.basic_consume(
            queue=self.callback_queue,
            on_message_callback=self._on_reply,
            auto_ack=True,
        )

    def _on_reply(self, ch, method, properties, body) -> None:
        if properties.correlation_id in self._pending:
            self._responses[properties.correlation_id] = body
        else:
            logger.debug(f"Dropping stale reply {properties.correlation_id}")

    def send(self, pattern: str, payload: Any) -> Any:
        with self._lock:
            self._ensure_connection()
            correlation_id = str(uuid.uuid4())
            self._pending.add(correlation_id)
            try:
                self.channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=pattern,
                    body=codec.encode(payload),
                    properties=pika.BasicProperties(
                        reply_to=self.callback_queue,
                        correlation_id=correlation_id,
                        content_type="application/json",
                        expiration=str(int(self.timeout * 1000)),
                    ),
                )
                deadline = time.monotonic() + self.timeout
                while correlation_id not in self._responses:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise RemoteUnavailableError(
                            f"No reply to '{pattern}' within {self.timeout}s",
                            pattern=pattern,
                        )
                    self.connection.process_data_events(time_limit=remaining)
                body = self._responses.pop(correlation_id)
            except pika.exceptions.AMQPError as exc:
                self._reset()
                raise RemoteUnavailableError(
                    f"Transport failure on '{pattern}': {exc!r}", pattern=pattern
                ) from exc
            finally:
                self._pending.discard(correlation_id)
                self._responses.pop(correlation_id, None)

        return codec.unwrap_reply(body, pattern)

    def _reset(self) -> None:
        self.connection = None
        self.channel = None
        self.callback_queue = None

    def close(self) -> None:
        if self.connection is not None and self.connection.is_open:
            self.connection.close()
        self._reset()


class RabbitMQConsumer:
    """
    Consumes commands (request/reply) and events from one durable queue.

    Command handlers return a reply envelope that is published back to the
    caller's reply_to queue. Event handlers are fire-and-forget.
    """

    def __init__(
        self,
        queue: str,
        command_handlers: Dict[str, Handler],
        event_handlers: Dict[str, Handler],
        params: Optional[pika.ConnectionParameters] = None,
        exchange: Optional[str] = None,
    ):
        self.queue = queue
        self.command_handlers = command_handlers
        self.event_handlers = event_handlers
        self.params = params
        self.exchange = exchange or settings.MESSAGING_EXCHANGE
        self.connection = None
        self.channel = None

    def _connect(self) -> None:
        self.connection = connect_with_retry(self.params)
        self.channel = self.connection.channel()
        self.channel.exchange_declare(
            exchange=self.exchange, exchange_type=EXCHANGE_TYPE, durable=True
        )
        self.channel.queue_declare(queue=self.queue, durable=True)
        for routing_key in [*self.command_handlers, *self.event_handlers]:
            self.channel.queue_bind(
                queue=self.queue, exchange=self.exchange, routing_key=routing_key
            )
            logger.info(f"Queue '{self.queue}' <- '{routing_key}'")
        self.channel.basic_qos(prefetch_count=1)

    def _on_message(self, ch, method, properties, body) -> None:
        pattern = method.routing_key
        try:
            payload = codec.decode(body)
        except ValueError as e:
            logger.warning(f"Malformed message on '{pattern}' rejected: {e}")
            self._reply(ch, properties, codec.error_reply(400, f"Malformed message: {e}"))
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return

        if pattern in self.event_handlers:
            reply = self.event_handlers[pattern](payload)
            if "error" in reply:
                logger.warning(f"Event '{pattern}' failed: {reply['error']}")
            ch.basic_ack(delivery_tag=method.delivery_tag)
            return

        handler = self.command_handlers.get(pattern)
        if handler is None:
            logger.warning(f"No handler for '{pattern}'")
            self._reply(ch, properties, codec.error_reply(404, f"Unknown pattern '{pattern}'"))
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return

        self._reply(ch, properties, handler(payload))
        ch.basic_ack(delivery_tag=method.delivery_tag)

    @staticmethod
    def _reply(ch, properties, envelope: Dict[str, Any]) -> None:
        if not properties or not properties.reply_to:
            return
        ch.basic_publish(
            exchange="",
            routing_key=properties.reply_to,
            body=codec.encode(envelope),
            properties=pika.BasicProperties(
                correlation_id=properties.correlation_id,
                content_type="application/json",
            ),
        )

    def run(self) -> None:
        self._connect()
        self.channel.basic_consume(
            queue=self.queue,
            on_message_callback=self._on_message,
            auto_ack=False,
        )
        logger.info(f"Listening on '{self.queue}'")
        try:
            self.channel.start_consuming()
        except KeyboardInterrupt:
            self.channel.stop_consuming()
        finally:
            if self.connection.is_open:
                self.connection.close()
            logger.info("Stopped.")
