"""
Order Django ORM models.
"""
import uuid

from django.db import models
from django.utils import timezone

from ...domain.value_objects.order_status import OrderStatus


class OrderModel(models.Model):
    """Order model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices(),
        default=OrderStatus.PENDING.value,
        db_index=True,
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_items = models.PositiveIntegerField()

    # Payment information
    paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    external_charge_id = models.CharField(max_length=255, null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.id} ({self.status})"


class OrderItemModel(models.Model):
    """Order item model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(OrderModel, on_delete=models.CASCADE, related_name='items')
    product_id = models.CharField(max_length=64)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()
    line_number = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'order_items'
        ordering = ['line_number']

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"


class OrderReceiptModel(models.Model):
    """Order receipt model, created on payment confirmation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField(OrderModel, on_delete=models.CASCADE, related_name='receipt')
    receipt_url = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'order_receipts'

    def __str__(self):
        return f"Receipt for order {self.order_id}"
