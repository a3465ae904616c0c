"""Automation app configuration."""

from django.apps import AppConfig


class AutomationConfig(AppConfig):
    """Django app config for scheduled synthetic order generation."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'automation'
