"""Database models for orders and order lines."""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Order(models.Model):
    """A cash-on-delivery order, placed by a customer or by the automation engine.

    ``total_amount`` is derived from the items at creation time and never
    edited on its own.
    """

    class OrderType(models.TextChoices):
        MANUAL = 'MANUAL', 'Manual'
        AUTO = 'AUTO', 'Automated'

    class PaymentMethod(models.TextChoices):
        COD = 'COD', 'Cash on Delivery'

    order_code = models.CharField(max_length=40, unique=True)
    customer_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20)
    address = models.TextField()
    city = models.CharField(max_length=100, blank=True, default='')
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    order_type = models.CharField(max_length=10, choices=OrderType.choices, default=OrderType.MANUAL)
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.COD)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['order_type', 'created_at'], name='order_type_created_idx'),
            models.Index(fields=['created_at'], name='order_created_idx'),
        ]

    def __str__(self):
        return f"{self.order_code} - {self.customer_name}"

    def items_total(self) -> Decimal:
        """Sum of the stored line totals."""
        return sum((item.line_total for item in self.items.all()), Decimal('0.00'))


class OrderItem(models.Model):
    """Line inside an order.

    Product name, unit price and discount are copied at purchase time so later
    catalog edits (or deletes) leave historical orders untouched.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
    )
    product_name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_percentage = models.PositiveSmallIntegerField(default=0)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Order Item"
        verbose_name_plural = "Order Items"
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name='order_item_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.product_name} x{self.quantity} ({self.order.order_code})"

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class OrderCodeSequence(models.Model):
    """Per-day counter backing ``PREFIX-YYYYMMDD-NNNN`` order codes."""

    day = models.DateField(unique=True)
    last_value = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.day:%Y%m%d} -> {self.last_value}"
