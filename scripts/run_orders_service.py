#!/usr/bin/env python
"""
Run the orders service: consume order commands and payment events from RabbitMQ.
"""
import os
import sys

import django

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.local')
django.setup()

import logging

from django.conf import settings

from apps.orders.infrastructure.container import build_order_orchestrator
from apps.orders.interfaces.messaging import OrderMessageHandlers
from shared.infrastructure.messaging.rabbitmq import RabbitMQConsumer, RabbitMQRpcClient

logger = logging.getLogger('orders_service')


def main():
    transport = RabbitMQRpcClient()
    handlers = OrderMessageHandlers(build_order_orchestrator(transport))
    consumer = RabbitMQConsumer(
        queue=settings.ORDERS_COMMAND_QUEUE,
        command_handlers=handlers.command_handlers,
        event_handlers=handlers.event_handlers,
    )
    logger.info("Orders service starting")
    try:
        consumer.run()
    finally:
        transport.close()


if __name__ == '__main__':
    main()
