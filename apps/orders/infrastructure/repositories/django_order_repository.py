"""
Django ORM implementation of OrderRepository.
"""
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction

from shared.domain.exceptions import PersistenceError
from ...domain.entities.order import Order
from ...domain.entities.order_item import OrderItem
from ...domain.exceptions import OrderNotFoundError
from ...domain.repositories.order_repository import OrderRepository
from ...domain.value_objects.order_receipt import OrderReceipt
from ...domain.value_objects.order_status import OrderStatus
from ..models.order_model import OrderModel, OrderItemModel, OrderReceiptModel


@contextmanager
def _database_errors(operation: str):
    """Re-raise driver errors as PersistenceError."""
    try:
        yield
    except DatabaseError as e:
        raise PersistenceError(f"Order store failed during {operation}: {e}", operation=operation) from e


class DjangoOrderRepository(OrderRepository):
    """Django ORM based order repository implementation."""

    def create(self, order: Order) -> Order:
        """Save a new order and all of its items in one transaction."""
        with _database_errors('create'):
            with transaction.atomic():
                model = OrderModel.objects.create(
                    id=order.id,
                    status=order.status.value,
                    total_amount=order.total_amount,
                    total_items=order.total_items,
                    paid=order.paid,
                    paid_at=order.paid_at,
                    external_charge_id=order.external_charge_id,
                    created_at=order.created_at,
                )
                OrderItemModel.objects.bulk_create([
                    OrderItemModel(
                        id=item.id,
                        order=model,
                        product_id=item.product_id,
                        price=item.price,
                        quantity=item.quantity,
                        line_number=line_number,
                        created_at=item.created_at,
                    )
                    for line_number, item in enumerate(order.items)
                ])
            return self._to_entity(self._get_model(order.id))

    def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Find an order by ID."""
        with _database_errors('find_by_id'):
            try:
                model = self._get_model(order_id)
            except OrderNotFoundError:
                return None
            return self._to_entity(model)

    def find_all(
        self,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Order]:
        """Find all orders with an optional status filter, items not loaded."""
        with _database_errors('find_all'):
            queryset = self._filtered(status).select_related('receipt')
            models = queryset.order_by('-created_at')[offset:offset + limit]
            return [self._to_entity(model, include_items=False) for model in models]

    def count(self, status: Optional[OrderStatus] = None) -> int:
        with _database_errors('count'):
            return self._filtered(status).count()

    def update_status(self, order_id: UUID, status: OrderStatus) -> Order:
        """Overwrite the status; no write happens when it is unchanged."""
        with _database_errors('update_status'):
            with transaction.atomic():
                model = self._get_model(order_id, for_update=True)
                order = self._to_entity(model)
                if order.change_status(status):
                    model.status = order.status.value
                    model.save(update_fields=['status', 'updated_at'])
                    order.updated_at = model.updated_at
            return order

    def mark_paid(
        self,
        order_id: UUID,
        external_charge_id: str,
        receipt_url: str,
        paid_at: Optional[datetime] = None,
    ) -> Order:
        """Set the paid fields and upsert the single receipt atomically."""
        with _database_errors('mark_paid'):
            with transaction.atomic():
                model = self._get_model(order_id, for_update=True)
                order = self._to_entity(model)
                order.mark_paid(
                    external_charge_id=external_charge_id,
                    receipt_url=receipt_url,
                    paid_at=paid_at,
                )
                model.status = order.status.value
                model.paid = order.paid
                model.paid_at = order.paid_at
                model.external_charge_id = order.external_charge_id
                model.save(update_fields=[
                    'status', 'paid', 'paid_at', 'external_charge_id', 'updated_at',
                ])
                OrderReceiptModel.objects.update_or_create(
                    order=model,
                    defaults={'receipt_url': receipt_url},
                )
                order.updated_at = model.updated_at
            return order

    @staticmethod
    def _filtered(status: Optional[OrderStatus]):
        queryset = OrderModel.objects.all()
        if status is not None:
            queryset = queryset.filter(status=OrderStatus(status).value)
        return queryset

    @staticmethod
    def _get_model(order_id: UUID, for_update: bool = False) -> OrderModel:
        queryset = OrderModel.objects.prefetch_related('items')
        if for_update:
            # row lock only; the receipt join would be the nullable side of an outer join
            queryset = queryset.select_for_update()
        else:
            queryset = queryset.select_related('receipt')
        try:
            return queryset.get(id=order_id)
        except (OrderModel.DoesNotExist, DjangoValidationError, ValueError):
            # malformed ids are reported as unknown orders
            raise OrderNotFoundError(str(order_id))

    def _to_entity(self, model: OrderModel, include_items: bool = True) -> Order:
        """Convert Django model to domain entity."""
        items = []
        if include_items:
            items = [
                OrderItem(
                    id=item.id,
                    order_id=model.id,
                    product_id=item.product_id,
                    price=item.price,
                    quantity=item.quantity,
                    created_at=item.created_at,
                    updated_at=item.created_at,
                )
                for item in model.items.all()
            ]
        try:
            receipt = OrderReceipt(receipt_url=model.receipt.receipt_url)
        except OrderReceiptModel.DoesNotExist:
            receipt = None

        return Order(
            id=model.id,
            items=items,
            status=OrderStatus(model.status),
            total_amount=model.total_amount,
            total_items=model.total_items,
            paid=model.paid,
            paid_at=model.paid_at,
            external_charge_id=model.external_charge_id,
            receipt=receipt,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
