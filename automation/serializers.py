"""DRF serializers for site settings and automation results."""

from rest_framework import serializers

from .models import SiteSettings
from .settings_store import validate_timezone, validate_window


class SiteSettingsSerializer(serializers.ModelSerializer):
    """Full settings row for the admin panel."""

    class Meta:
        model = SiteSettings
        fields = [
            'automation_enabled',
            'automation_start_hour',
            'automation_end_hour',
            'automation_timezone',
            'ticker_text',
            'ticker_enabled',
            'logo',
            'updated_at',
        ]
        read_only_fields = ['updated_at']

    def validate_automation_timezone(self, value):
        try:
            validate_timezone(value)
        except ValueError as exc:
            raise serializers.ValidationError(str(exc))
        return value

    def validate(self, attrs):
        start = attrs.get('automation_start_hour', getattr(self.instance, 'automation_start_hour', None))
        end = attrs.get('automation_end_hour', getattr(self.instance, 'automation_end_hour', None))
        try:
            validate_window(start, end)
        except ValueError as exc:
            raise serializers.ValidationError({'automation_end_hour': str(exc)})
        return attrs


class PublicSiteSettingsSerializer(serializers.ModelSerializer):
    """Display-only fields the storefront needs."""

    class Meta:
        model = SiteSettings
        fields = ['ticker_text', 'ticker_enabled', 'logo']

