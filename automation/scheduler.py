"""Time-windowed, rate-limited driver for the order generator.

Each :meth:`AutomationScheduler.run` call is one tick from an external
trigger (cron, management command or the admin API). A tick either does
nothing (automation stopped, window closed, batch already running) or runs
one full batch of generator calls and reports how many succeeded.
"""

import enum
import logging
import math
import random
import time
from dataclasses import dataclass, field

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from .errors import AutomationError, OutsideWindow
from .generator import OrderGenerator
from .lease import BatchLease
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)


class SchedulerState(str, enum.Enum):
    IDLE = 'idle'
    WINDOW_CLOSED = 'window_closed'
    BUSY = 'busy'
    GENERATING = 'generating'
    COOLDOWN = 'cooldown'


@dataclass
class AutomationRunResult:
    success: bool
    state: SchedulerState
    generated: int = 0
    attempted: int = 0
    message: str = ''
    results: list = field(default_factory=list)

    def as_dict(self, include_results: bool = True) -> dict:
        data = {
            'success': self.success,
            'state': self.state.value,
            'generated': self.generated,
            'attempted': self.attempted,
            'message': self.message,
        }
        if include_results:
            data['results'] = self.results
        return data


class AutomationScheduler:
    """Runs at most one batch of generator calls per invocation."""

    def __init__(
        self,
        settings_store: SettingsStore | None = None,
        generator: OrderGenerator | None = None,
        *,
        rng: random.Random | None = None,
        batch_size: tuple[int, int] | None = None,
        call_delay: tuple[float, float] | None = None,
        clock=None,
        sleep=time.sleep,
        lease_factory=BatchLease,
    ):
        self.settings_store = settings_store or SettingsStore()
        self.rng = rng or random.Random()
        self.generator = generator or OrderGenerator(self.settings_store, rng=self.rng)
        self.batch_size = tuple(batch_size or settings.AUTOMATION_BATCH_SIZE)
        self.call_delay = tuple(call_delay or settings.AUTOMATION_CALL_DELAY)
        self.clock = clock or timezone.now
        self.sleep = sleep
        self.lease_factory = lease_factory
        self.state = SchedulerState.IDLE

        if self.batch_size[0] < 1 or self.batch_size[0] > self.batch_size[1]:
            raise ValueError(f"Invalid batch size range: {self.batch_size}")

        # a batch may outlive the configured TTL when every webhook call hangs
        worst_case = self.batch_size[1] * (self.call_delay[1] + settings.AUTOMATION_HTTP_TIMEOUT)
        self.lease_ttl = max(settings.AUTOMATION_LEASE_TTL, math.ceil(worst_case))

    def run(self) -> AutomationRunResult:
        try:
            snapshot = self.settings_store.get()
        except DatabaseError as exc:
            logger.exception("Could not read site settings, skipping this tick")
            self.state = SchedulerState.IDLE
            return AutomationRunResult(False, self.state, message=f"Settings unavailable: {exc}")

        if not snapshot.automation_enabled:
            self.state = SchedulerState.IDLE
            return AutomationRunResult(False, self.state, message='Automation is stopped')

        now = self.clock()
        try:
            window_open = snapshot.window_open(now)
        except ValueError as exc:
            logger.error("Automation window misconfigured: %s", exc)
            self.state = SchedulerState.IDLE
            return AutomationRunResult(False, self.state, message=str(exc))

        if not window_open:
            self.state = SchedulerState.WINDOW_CLOSED
            hour = snapshot.local_hour(now)
            message = (
                f"{OutsideWindow.default_message} ({snapshot.automation_start_hour}:00-"
                f"{snapshot.automation_end_hour}:00 {snapshot.automation_timezone}), current hour {hour}"
            )
            logger.info(message)
            return AutomationRunResult(False, self.state, message=message)

        result = None
        try:
            with self.lease_factory(ttl_seconds=self.lease_ttl) as lease:
                if not lease.acquired:
                    self.state = SchedulerState.BUSY
                    logger.info("Another automation batch is still running, skipping this tick")
                    return AutomationRunResult(False, self.state, message="Automation batch already running")
                result = self._run_batch()
        except DatabaseError as exc:
            if result is not None:
                logger.exception("Could not release the automation lease after the batch")
                return result
            logger.exception("Automation lease unavailable, skipping this tick")
            self.state = SchedulerState.IDLE
            return AutomationRunResult(False, self.state, message=f"Lease unavailable: {exc}")
        return result

    def _run_batch(self) -> AutomationRunResult:
        self.state = SchedulerState.GENERATING
        attempted = self.rng.randint(*self.batch_size)
        results = []

        for index in range(attempted):
            try:
                summary = self.generator.generate()
            except AutomationError as exc:
                logger.info("Order %d/%d not generated: %s", index + 1, attempted, exc.message)
                results.append({'success': False, 'code': exc.code, 'message': exc.message})
            except Exception as exc:
                logger.exception("Order %d/%d failed unexpectedly", index + 1, attempted)
                results.append({'success': False, 'code': 'unexpected_error', 'message': str(exc)})
            else:
                results.append({'success': True, 'order': summary.as_dict()})

            if index < attempted - 1:
                self.sleep(self.rng.uniform(*self.call_delay))

        generated = sum(1 for r in results if r['success'])
        self.state = SchedulerState.COOLDOWN
        logger.info("Automation run complete: generated %d/%d orders", generated, attempted)
        return AutomationRunResult(
            True,
            self.state,
            generated=generated,
            attempted=attempted,
            message=f"Generated {generated}/{attempted} orders",
            results=results,
        )
