"""Budget-constrained random product selection."""

import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from products.models import discounted_price

MAX_DISTINCT_ITEMS = 5
MAX_QUANTITY = 3


@dataclass(frozen=True)
class SelectedItem:
    product: object
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


def select_items(products: Sequence, max_total, rng: random.Random | None = None) -> list[SelectedItem]:
    """Pick up to five distinct products with quantities whose total fits the budget.

    Candidates are visited in shuffled order; one that would overshoot the
    running total is skipped, never retried with a smaller quantity. An
    empty list is a valid outcome.
    """

    if not products:
        raise ValueError("select_items() needs at least one product")
    max_total = Decimal(str(max_total))
    if max_total <= 0:
        raise ValueError("max_total must be positive")

    rng = rng or random.Random()

    count = min(rng.randint(1, MAX_DISTINCT_ITEMS), len(products))
    pool = list(products)
    rng.shuffle(pool)

    selected = []
    running_total = Decimal('0')
    for product in pool[:count]:
        unit_price = discounted_price(product.price, product.discount_percentage)
        quantity = rng.randint(1, MAX_QUANTITY)
        line_total = unit_price * quantity
        if running_total + line_total <= max_total:
            selected.append(SelectedItem(product, quantity, unit_price))
            running_total += line_total
    return selected


def selection_total(items: Sequence[SelectedItem]) -> Decimal:
    return sum((item.line_total for item in items), Decimal('0.00'))
