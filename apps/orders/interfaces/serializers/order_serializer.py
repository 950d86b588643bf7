"""
Order message payload serializers.
"""
from rest_framework import serializers

from ...application.dtos.order_dto import (
    ChangeOrderStatusDTO,
    CreateOrderDTO,
    OrderItemInputDTO,
    OrderPaginationDTO,
    PaidOrderDTO,
)
from ...domain.value_objects.order_status import OrderStatus
from shared.interfaces.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

STATUS_VALUES = [status.value for status in OrderStatus]


def _status_field(**kwargs) -> serializers.ChoiceField:
    return serializers.ChoiceField(
        choices=STATUS_VALUES,
        error_messages={'invalid_choice': f"Valid statuses are {STATUS_VALUES}"},
        **kwargs,
    )


class OrderItemInputSerializer(serializers.Serializer):
    """Serializer for one requested order line."""
    productId = serializers.CharField(max_length=64, source='product_id')
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Serializer for creating an order."""
    items = OrderItemInputSerializer(many=True, allow_empty=False)

    def to_dto(self) -> CreateOrderDTO:
        return CreateOrderDTO(
            items=[OrderItemInputDTO(**item) for item in self.validated_data['items']]
        )


class OrderPaginationSerializer(serializers.Serializer):
    """Serializer for listing orders."""
    page = serializers.IntegerField(min_value=1, default=DEFAULT_PAGE)
    limit = serializers.IntegerField(min_value=1, max_value=MAX_LIMIT, default=DEFAULT_LIMIT)
    status = _status_field(required=False)

    def to_dto(self) -> OrderPaginationDTO:
        data = self.validated_data
        status = data.get('status')
        return OrderPaginationDTO(
            page=data['page'],
            limit=data['limit'],
            status=OrderStatus(status) if status else None,
        )


class OrderIdSerializer(serializers.Serializer):
    """Serializer for commands addressing one order."""
    id = serializers.UUIDField()

    def to_dto(self):
        return self.validated_data['id']


class ChangeOrderStatusSerializer(serializers.Serializer):
    """Serializer for a status change request."""
    id = serializers.UUIDField()
    status = _status_field()

    def to_dto(self) -> ChangeOrderStatusDTO:
        return ChangeOrderStatusDTO(
            id=self.validated_data['id'],
            status=OrderStatus(self.validated_data['status']),
        )


class PaidOrderSerializer(serializers.Serializer):
    """Serializer for the payment confirmation event."""
    orderId = serializers.UUIDField(source='order_id')
    stripePaymentId = serializers.CharField(max_length=255, source='stripe_payment_id')
    receiptUrl = serializers.URLField(max_length=2048, source='receipt_url')

    def to_dto(self) -> PaidOrderDTO:
        return PaidOrderDTO(**self.validated_data)
