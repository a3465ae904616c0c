"""Synthetic order generation.

One call produces at most one AUTO order: the settings and catalog are
checked, a basket is drawn under the budget cap, a customer identity is
invented, and the order is written together with its items in a single
transaction. The webhook sync is queued by the ``orders`` post-save signal
and only runs after that transaction commits.
"""

import logging
import random
import time
from dataclasses import asdict, dataclass
from decimal import Decimal
from functools import wraps

from django.conf import settings
from django.db import DatabaseError, IntegrityError, InterfaceError, OperationalError, transaction

from orders.codes import fallback_order_code, next_order_code
from orders.models import Order, OrderItem
from products.models import Product
from .errors import (
    AutomationDisabled,
    NoFittingProducts,
    NoProductsAvailable,
    PersistenceFailure,
    UpstreamUnavailable,
)
from .identity import random_identity
from .selector import select_items, selection_total
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)

TRANSIENT_DB_ERRORS = (OperationalError, InterfaceError)
RETRY_BACKOFF = 0.1


def retry_once(fn):
    """Retry a read once on a transient connection error.

    Any database error that survives the retry surfaces as UpstreamUnavailable.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):
        for attempt in (1, 2):
            try:
                return fn(*args, **kwargs)
            except TRANSIENT_DB_ERRORS as exc:
                if attempt == 2:
                    raise UpstreamUnavailable(f"{fn.__name__}: {exc}") from exc
                logger.warning("%s failed (%s), retrying once", fn.__name__, exc)
                time.sleep(RETRY_BACKOFF)
            except DatabaseError as exc:
                raise UpstreamUnavailable(f"{fn.__name__}: {exc}") from exc
    return wrapper


@dataclass(frozen=True)
class OrderSummary:
    order_id: int
    order_code: str
    customer_name: str
    items_count: int
    total_amount: Decimal

    def as_dict(self) -> dict:
        data = asdict(self)
        data['total_amount'] = str(self.total_amount)
        return data


class OrderGenerator:
    """Creates one AUTO order per :meth:`generate` call."""

    def __init__(self, settings_store: SettingsStore | None = None, rng: random.Random | None = None, budget=None):
        self.settings_store = settings_store or SettingsStore()
        self.rng = rng or random.Random()
        self.budget = Decimal(str(budget if budget is not None else settings.AUTOMATION_ORDER_BUDGET))

    @retry_once
    def _read_settings(self):
        return self.settings_store.get()

    @retry_once
    def _list_products(self):
        return list(Product.objects.all())

    def _persist(self, order_code, customer, total, selection) -> Order:
        with transaction.atomic():
            order = Order.objects.create(
                order_code=order_code,
                customer_name=customer.name,
                phone_number=customer.phone_number,
                address=customer.address,
                city=customer.city,
                total_amount=total,
                order_type=Order.OrderType.AUTO,
                payment_method=Order.PaymentMethod.COD,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    product=item.product,
                    product_name=item.product.name,
                    unit_price=item.unit_price,
                    discount_percentage=item.product.discount_percentage,
                    quantity=item.quantity,
                )
                for item in selection
            ])
        return order

    def generate(self) -> OrderSummary:
        if not self._read_settings().automation_enabled:
            raise AutomationDisabled()

        products = self._list_products()
        if not products:
            raise NoProductsAvailable()

        selection = select_items(products, self.budget, rng=self.rng)
        if not selection:
            raise NoFittingProducts()

        customer = random_identity(self.rng)
        order_code = next_order_code(rng=self.rng)
        total = selection_total(selection)

        try:
            try:
                order = self._persist(order_code, customer, total, selection)
            except IntegrityError:
                # another writer took the same code between lookup and insert
                if not Order.objects.filter(order_code=order_code).exists():
                    raise
                logger.warning("Order code %s already taken, retrying with a timestamp code", order_code)
                order_code = fallback_order_code()
                order = self._persist(order_code, customer, total, selection)
        except DatabaseError as exc:
            logger.exception("Could not persist automated order %s; nothing was saved", order_code)
            raise PersistenceFailure(str(exc)) from exc

        logger.info("Generated order %s for %s, total %s", order_code, customer.name, total)
        return OrderSummary(
            order_id=order.pk,
            order_code=order_code,
            customer_name=customer.name,
            items_count=len(selection),
            total_amount=total,
        )
