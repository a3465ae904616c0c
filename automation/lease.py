"""Row-locked lease so that overlapping triggers never run two batches at once."""

import logging
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import AutomationLease

logger = logging.getLogger(__name__)

DEFAULT_LEASE_NAME = 'order-automation'


def acquire_lease(name: str, ttl_seconds: int, *, now=None) -> str | None:
    """Take the lease and return its token, or None while someone else holds it.

    An expired lease is taken over; its previous holder can no longer release it.
    """
    now = now or timezone.now()
    with transaction.atomic():
        AutomationLease.objects.get_or_create(name=name)
        lease = AutomationLease.objects.select_for_update().get(name=name)
        if lease.token and lease.expires_at and lease.expires_at > now:
            return None
        if lease.token:
            logger.warning("Taking over expired lease %s (held until %s)", name, lease.expires_at)
        lease.token = uuid.uuid4().hex
        lease.expires_at = now + timedelta(seconds=ttl_seconds)
        lease.save(update_fields=['token', 'expires_at'])
    return lease.token


def release_lease(name: str, token: str) -> bool:
    """Release the lease if ``token`` still owns it."""
    released = AutomationLease.objects.filter(name=name, token=token).update(token='', expires_at=None)
    return bool(released)


class BatchLease:
    """Context manager around :func:`acquire_lease`/:func:`release_lease`.

    ``acquired`` tells whether the body may run a batch.
    """

    def __init__(self, name: str = DEFAULT_LEASE_NAME, ttl_seconds: int | None = None):
        self.name = name
        self.ttl_seconds = ttl_seconds or settings.AUTOMATION_LEASE_TTL
        self.token = None

    @property
    def acquired(self) -> bool:
        return self.token is not None

    def __enter__(self):
        self.token = acquire_lease(self.name, self.ttl_seconds)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.token is not None and not release_lease(self.name, self.token):
            logger.warning("Lease %s expired before the batch finished", self.name)
        self.token = None
        return False
