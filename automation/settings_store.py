"""Read/write access to the site settings singleton.

Callers get immutable snapshots; the scheduler and generator never hold on
to the model instance.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.db import transaction

from .models import SiteSettings

EDITABLE_FIELDS = (
    'automation_enabled',
    'automation_start_hour',
    'automation_end_hour',
    'automation_timezone',
    'ticker_text',
    'ticker_enabled',
    'logo',
)


def validate_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc


def validate_window(start_hour: int, end_hour: int) -> None:
    for label, hour in (('start', start_hour), ('end', end_hour)):
        if not 0 <= int(hour) <= 23:
            raise ValueError(f"Automation {label} hour must be between 0 and 23, got {hour}")
    if start_hour >= end_hour:
        raise ValueError("Automation start hour must be before the end hour")


@dataclass(frozen=True)
class SettingsSnapshot:
    automation_enabled: bool
    automation_start_hour: int
    automation_end_hour: int
    automation_timezone: str
    ticker_text: str = ''
    ticker_enabled: bool = True

    @classmethod
    def from_model(cls, obj: SiteSettings) -> 'SettingsSnapshot':
        return cls(**{f.name: getattr(obj, f.name) for f in fields(cls)})

    def local_hour(self, now: datetime) -> int:
        return now.astimezone(validate_timezone(self.automation_timezone)).hour

    def window_open(self, now: datetime) -> bool:
        """True when ``now`` falls in the half-open [start, end) local hour window."""
        hour = self.local_hour(now)
        return self.automation_start_hour <= hour < self.automation_end_hour


class SettingsStore:
    """Injected configuration store around :class:`SiteSettings`."""

    def get(self) -> SettingsSnapshot:
        return SettingsSnapshot.from_model(SiteSettings.load())

    def update(self, **changes) -> SettingsSnapshot:
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown settings fields: {', '.join(sorted(unknown))}")

        with transaction.atomic():
            obj = SiteSettings.load()
            obj = SiteSettings.objects.select_for_update().get(pk=obj.pk)
            for name, value in changes.items():
                setattr(obj, name, value)

            validate_window(obj.automation_start_hour, obj.automation_end_hour)
            validate_timezone(obj.automation_timezone)
            obj.save(update_fields=[*changes, 'updated_at'])

        return SettingsSnapshot.from_model(obj)
