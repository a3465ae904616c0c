"""Seed a small sample catalog and the site settings row.

Usage:
  python manage.py seed_catalog
  python manage.py seed_catalog --reset --seed 42 --enable-automation
"""

import random
from decimal import Decimal, ROUND_HALF_UP

from django.core.management.base import BaseCommand
from django.db import transaction

from automation.models import SiteSettings
from products.models import Product

SAMPLE_PRODUCTS = [
    ('Lawn Suit 3-Piece', 4500),
    ('Embroidered Kurta', 3200),
    ('Peshawari Chappal', 2800),
    ('Wireless Earbuds', 5500),
    ('Smart Watch', 8900),
    ('Power Bank 20000mAh', 4200),
    ('Leather Wallet', 1500),
    ('Cotton Shalwar Kameez', 3800),
    ('Pashmina Shawl', 6500),
    ('Attar Gift Set', 2400),
    ('Ceramic Dinner Set', 12500),
    ('Prayer Mat', 1800),
    ('Steel Water Bottle', 1200),
    ('Bluetooth Speaker', 7400),
    ('Khussa Flats', 2100),
]


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class Command(BaseCommand):
    help = 'Create sample products (and the site settings row) for local development.'

    def add_arguments(self, parser):
        parser.add_argument('--reset', action='store_true', help='Delete existing products first.')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible discounts.')
        parser.add_argument('--enable-automation', action='store_true', help='Switch automation on in site settings.')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])

        with transaction.atomic():
            if options['reset']:
                deleted, _ = Product.objects.all().delete()
                self.stdout.write(self.style.NOTICE(f"Deleted {deleted} existing rows"))

            created = 0
            for name, price in SAMPLE_PRODUCTS:
                _, was_created = Product.objects.get_or_create(
                    name=name,
                    defaults={
                        'price': _money(price),
                        'discount_percentage': rng.choice([0, 0, 5, 10, 15, 20, 25]),
                    },
                )
                created += int(was_created)

            site = SiteSettings.load()
            if options['enable_automation'] and not site.automation_enabled:
                site.automation_enabled = True
                site.save(update_fields=['automation_enabled', 'updated_at'])

        self.stdout.write(self.style.SUCCESS(f"Catalog ready: {created} new product(s), {Product.objects.count()} total"))
        state = 'enabled' if SiteSettings.load().automation_enabled else 'disabled'
        self.stdout.write(self.style.NOTICE(f"Automation is {state}"))
