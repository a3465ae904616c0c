"""Human-readable order code generation.

Primary strategy is a per-day database counter (``CHR-20250101-0001``). A
random four-digit suffix is available as an alternative strategy. Whenever the
primary generator cannot produce a code, a timestamp code (``CHR-<millis>``)
is used instead.
"""

import logging
import random
import time

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from .models import Order, OrderCodeSequence

logger = logging.getLogger(__name__)

RANDOM_SUFFIX_ATTEMPTS = 5


def _prefix() -> str:
    return getattr(settings, 'ORDER_CODE_PREFIX', 'CHR')


def fallback_order_code(prefix: str | None = None) -> str:
    return f"{prefix or _prefix()}-{int(time.time() * 1000)}"


def _sequence_code(prefix: str, now) -> str:
    day = now.date()
    with transaction.atomic():
        seq, _ = OrderCodeSequence.objects.select_for_update().get_or_create(day=day)
        seq.last_value += 1
        seq.save(update_fields=['last_value'])
    return f"{prefix}-{day:%Y%m%d}-{seq.last_value:04d}"


def _random_code(prefix: str, now, rng) -> str | None:
    stamp = f"{now:%Y%m%d}"
    for _ in range(RANDOM_SUFFIX_ATTEMPTS):
        code = f"{prefix}-{stamp}-{rng.randint(0, 9999):04d}"
        if not Order.objects.filter(order_code=code).exists():
            return code
    return None


def next_order_code(*, now=None, rng=None, strategy: str | None = None) -> str:
    """Return a fresh order code, falling back to a timestamp code on failure."""
    prefix = _prefix()
    now = now or timezone.now()
    strategy = strategy or getattr(settings, 'ORDER_CODE_STRATEGY', 'sequence')

    try:
        if strategy == 'random':
            code = _random_code(prefix, now, rng or random)
            if code is not None:
                return code
            logger.warning("Random order code collided %d times, using timestamp code", RANDOM_SUFFIX_ATTEMPTS)
        else:
            return _sequence_code(prefix, now)
    except DatabaseError:
        logger.warning("Order code generator unavailable, using timestamp code", exc_info=True)

    return fallback_order_code(prefix)
