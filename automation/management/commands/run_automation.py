"""Run one automation tick: the entry point for cron or any recurring trigger.

Usage:
  python manage.py run_automation
  python manage.py run_automation --batch-size 75,85 --seed 7 --json
"""

import json
import random

from django.core.management.base import BaseCommand, CommandError

from automation.scheduler import AutomationScheduler, SchedulerState


def _parse_range(raw: str, cast):
    try:
        low, high = (cast(part.strip()) for part in raw.split(',', 1))
    except ValueError as exc:
        raise CommandError(f"Expected LOW,HIGH, got {raw!r}") from exc
    if low > high:
        raise CommandError(f"Lower bound {low} is greater than upper bound {high}")
    return low, high


class Command(BaseCommand):
    help = 'Generate one batch of automated orders if automation is on and inside its time window.'

    def add_arguments(self, parser):
        parser.add_argument('--batch-size', type=str, default=None, help='Override the batch size range, e.g. "18,24".')
        parser.add_argument('--delay', type=str, default=None, help='Override the delay range in seconds between orders, e.g. "0.2,0.5".')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible runs.')
        parser.add_argument('--json', action='store_true', help='Print the full run result as JSON.')

    def handle(self, *args, **options):
        kwargs = {}
        if options['batch_size']:
            kwargs['batch_size'] = _parse_range(options['batch_size'], int)
        if options['delay']:
            kwargs['call_delay'] = _parse_range(options['delay'], float)
        if options['seed'] is not None:
            kwargs['rng'] = random.Random(options['seed'])

        try:
            scheduler = AutomationScheduler(**kwargs)
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        result = scheduler.run()

        if options['json']:
            self.stdout.write(json.dumps(result.as_dict(), indent=2))
            return

        if result.state == SchedulerState.COOLDOWN:
            style = self.style.SUCCESS if result.generated == result.attempted else self.style.WARNING
            self.stdout.write(style(result.message))
        else:
            self.stdout.write(self.style.NOTICE(f"[{result.state.value}] {result.message}"))
