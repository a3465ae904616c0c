"""Generate a single automated order, ignoring the time window."""

import random

from django.core.management.base import BaseCommand, CommandError

from automation.errors import GenerationError
from automation.generator import OrderGenerator


class Command(BaseCommand):
    help = 'Create one AUTO order (automation must be enabled in site settings).'

    def add_arguments(self, parser):
        parser.add_argument('--count', type=int, default=1, help='Number of orders to generate.')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible orders.')

    def handle(self, *args, **options):
        if options['count'] < 1:
            raise CommandError('--count must be at least 1')

        rng = random.Random(options['seed']) if options['seed'] is not None else None
        generator = OrderGenerator(rng=rng)

        created = 0
        for _ in range(options['count']):
            try:
                summary = generator.generate()
            except GenerationError as exc:
                self.stdout.write(self.style.WARNING(f"[{exc.code}] {exc.message}"))
                continue
            created += 1
            self.stdout.write(self.style.SUCCESS(
                f"{summary.order_code}: {summary.customer_name}, "
                f"{summary.items_count} item(s), total {summary.total_amount}"
            ))

        self.stdout.write(self.style.NOTICE(f"Generated {created}/{options['count']} orders"))
