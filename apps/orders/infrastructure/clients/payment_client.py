"""
Payment client over the message transport.
"""
from typing import Any, Dict, Sequence
from uuid import UUID

from shared.infrastructure.messaging import MessageTransport
from ...domain.gateways.payment_gateway import PaymentGateway

CREATE_PAYMENT_SESSION = 'create.payment.session'


class PaymentClient(PaymentGateway):
    """
    Creates checkout sessions; the reply is returned verbatim.

    Line prices are the order's stored unit prices, rounded to cents. They
    travel as decimal strings (e.g. "10.00"), not JSON numbers.
    """

    def __init__(self, transport: MessageTransport):
        self.transport = transport

    def create_session(
        self,
        order_id: UUID,
        currency: str,
        line_items: Sequence[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return self.transport.send(
            CREATE_PAYMENT_SESSION,
            {
                'orderId': str(order_id),
                'currency': currency,
                'items': [
                    {
                        'name': item['name'],
                        'price': item['price'],
                        'quantity': item['quantity'],
                    }
                    for item in line_items
                ],
            },
        )
