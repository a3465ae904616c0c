"""Database models for site settings and the automation batch lease."""

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

HOUR_VALIDATORS = [MinValueValidator(0), MaxValueValidator(23)]


class SiteSettings(models.Model):
    """Singleton configuration row written by the admin panel.

    The automation fields drive the scheduler; ticker and logo are only
    displayed by the storefront.
    """

    SINGLETON_PK = 1

    automation_enabled = models.BooleanField(default=False)
    automation_start_hour = models.PositiveSmallIntegerField(default=11, validators=HOUR_VALIDATORS)
    automation_end_hour = models.PositiveSmallIntegerField(default=23, validators=HOUR_VALIDATORS)
    automation_timezone = models.CharField(max_length=64, default='Asia/Karachi')
    ticker_text = models.CharField(max_length=255, blank=True, default='')
    ticker_enabled = models.BooleanField(default=True)
    logo = models.ImageField(upload_to='branding/', null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Site Settings"
        verbose_name_plural = "Site Settings"

    def __str__(self):
        state = 'running' if self.automation_enabled else 'stopped'
        return f"Site settings (automation {state})"

    def clean(self):
        from .settings_store import validate_timezone, validate_window

        if self.automation_start_hour is None or self.automation_end_hour is None:
            return
        try:
            validate_window(self.automation_start_hour, self.automation_end_hour)
            validate_timezone(self.automation_timezone)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return obj


class AutomationLease(models.Model):
    """Named lease guaranteeing at most one automation batch in flight."""

    name = models.CharField(max_length=64, unique=True)
    token = models.CharField(max_length=64, blank=True, default='')
    expires_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.name} ({'held' if self.token else 'free'})"
