"""
Find all orders use case.
"""
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult
from shared.interfaces.pagination import PageMeta, page_offset
from ...domain.repositories.order_repository import OrderRepository
from ..dtos.order_dto import OrderDTO, OrderPageDTO, OrderPaginationDTO


@dataclass
class FindAllOrdersUseCase(UseCase[OrderPaginationDTO, OrderPageDTO]):
    """Use case for listing a page of orders. Items are not decorated with names."""

    order_repository: OrderRepository

    def execute(self, input_dto: OrderPaginationDTO) -> UseCaseResult[OrderPageDTO]:
        total = self.order_repository.count(status=input_dto.status)
        orders = self.order_repository.find_all(
            status=input_dto.status,
            offset=page_offset(input_dto.page, input_dto.limit),
            limit=input_dto.limit,
        )
        return UseCaseResult.ok(
            OrderPageDTO(
                data=[OrderDTO.from_entity(order) for order in orders],
                meta=PageMeta.build(total=total, page=input_dto.page, limit=input_dto.limit),
            )
        )
