"""Signals for order side-effects (spreadsheet sync)."""

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Order
from .sync import queue_order_sync


@receiver(post_save, sender=Order)
def sync_new_order(sender, instance, created, **kwargs):
    """Queue the webhook delivery for newly created orders.

    The delivery runs after commit, so the items written in the same
    transaction are part of the payload.
    """
    if created:
        queue_order_sync(instance.pk)
