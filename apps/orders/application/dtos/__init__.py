# DTOs
from .order_dto import (
    OrderItemInputDTO,
    CreateOrderDTO,
    OrderPaginationDTO,
    ChangeOrderStatusDTO,
    PaidOrderDTO,
    OrderItemDTO,
    OrderDTO,
    OrderPageDTO,
)

__all__ = [
    'OrderItemInputDTO',
    'CreateOrderDTO',
    'OrderPaginationDTO',
    'ChangeOrderStatusDTO',
    'PaidOrderDTO',
    'OrderItemDTO',
    'OrderDTO',
    'OrderPageDTO',
]
