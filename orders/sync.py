"""Best-effort fan-out of completed orders to the spreadsheet webhook.

Delivery is at-most-once: a payload is posted once after the order's
transaction commits, and any failure is logged and dropped. Order creation
never depends on the outcome.
"""

import logging

import requests
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import Order

logger = logging.getLogger(__name__)

PAYLOAD_VERSIONS = (1, 2)


class SyncFailure(Exception):
    """The webhook rejected the payload or could not be reached."""


def _items_summary(order: Order) -> str:
    return ', '.join(f"{item.product_name} x{item.quantity}" for item in order.items.all())


def build_sync_payload(order: Order, version: int = 2) -> dict:
    """Flatten an order into the webhook record for the given payload version.

    Version 1 mirrors the original spreadsheet columns; version 2 is the flat
    record with separate local date and time columns.
    """

    if version not in PAYLOAD_VERSIONS:
        raise ValueError(f"Unknown sync payload version: {version}")

    created = order.created_at or timezone.now()

    if version == 1:
        return {
            'payload_version': 1,
            'order_id': order.order_code,
            'date_time': created.isoformat(),
            'customer_name': order.customer_name,
            'phone_number': order.phone_number,
            'address': order.address,
            'city': order.city or '',
            'products': _items_summary(order),
            'total_amount': str(order.total_amount),
            'order_type': order.order_type,
            'payment_method': order.payment_method,
        }

    local = timezone.localtime(created)
    return {
        'payload_version': 2,
        'order_id': order.order_code,
        'name': order.customer_name,
        'date': local.strftime('%Y-%m-%d'),
        'contact_number': order.phone_number,
        'type': order.order_type,
        'address': ', '.join(part for part in (order.address, order.city) if part),
        'time': local.strftime('%H:%M:%S'),
    }


class OrderSyncNotifier:
    """Posts order records to the configured webhook URL."""

    def __init__(self, url: str | None = None, *, version: int | None = None, timeout: float | None = None, session=None):
        self.url = settings.ORDER_SYNC_WEBHOOK_URL if url is None else url
        self.version = version or settings.ORDER_SYNC_PAYLOAD_VERSION
        self.timeout = timeout or settings.AUTOMATION_HTTP_TIMEOUT
        self.session = session or requests

    def _post(self, payload: dict) -> None:
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SyncFailure(str(exc)) from exc
        if not 200 <= response.status_code < 300:
            raise SyncFailure(f"webhook answered HTTP {response.status_code}")

    def deliver(self, order: Order) -> bool:
        """Send one order. Returns True when the webhook accepted it."""
        if not self.url:
            logger.debug("Order sync webhook not configured, skipping %s", order.order_code)
            return False

        payload = build_sync_payload(order, self.version)
        try:
            self._post(payload)
        except SyncFailure as exc:
            logger.warning("Order %s sync failed: %s", order.order_code, exc)
            return False

        logger.info("Order %s synced", order.order_code)
        return True


def deliver_order_sync(order_id: int) -> bool:
    order = Order.objects.filter(pk=order_id).prefetch_related('items').first()
    if order is None:
        logger.warning("Order %s vanished before sync", order_id)
        return False
    return OrderSyncNotifier().deliver(order)


def queue_order_sync(order_id: int) -> None:
    """Schedule a single delivery attempt once the current transaction commits."""
    transaction.on_commit(lambda: deliver_order_sync(order_id), robust=True)
