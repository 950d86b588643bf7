# Use cases
from .create_order import CreateOrderUseCase
from .find_all_orders import FindAllOrdersUseCase
from .find_one_order import FindOneOrderUseCase
from .change_order_status import ChangeOrderStatusUseCase
from .create_payment_session import CreatePaymentSessionUseCase
from .mark_order_paid import MarkOrderPaidUseCase

__all__ = [
    'CreateOrderUseCase',
    'FindAllOrdersUseCase',
    'FindOneOrderUseCase',
    'ChangeOrderStatusUseCase',
    'CreatePaymentSessionUseCase',
    'MarkOrderPaidUseCase',
]
