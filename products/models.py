"""Database models for the product catalog."""

from decimal import Decimal, ROUND_HALF_UP

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

CENT = Decimal('0.01')


def discounted_price(price, discount_percentage) -> Decimal:
    """Unit price after discount, rounded half-up to whole cents."""
    price = Decimal(str(price))
    discount = Decimal(int(discount_percentage or 0))
    value = price * (Decimal('1') - discount / Decimal('100'))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class Product(models.Model):
    """Catalog entry sold on the storefront.

    The automation engine only ever reads these rows; orders keep their own
    denormalised copy of name/price/discount.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(CENT)],
    )
    discount_percentage = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
    )
    image = models.ImageField(upload_to='products/', null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount_percentage__lte=100),
                name='product_discount_percentage_lte_100',
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name='product_price_positive',
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def effective_price(self) -> Decimal:
        return discounted_price(self.price, self.discount_percentage)
