"""Django admin configuration for site settings and the automation lease."""

from django.contrib import admin

from .models import AutomationLease, SiteSettings


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    """Singleton settings page; there is only ever one row."""

    list_display = ('__str__', 'automation_start_hour', 'automation_end_hour', 'automation_timezone', 'updated_at')
    fieldsets = (
        ('Automation', {
            'fields': ('automation_enabled', 'automation_start_hour', 'automation_end_hour', 'automation_timezone'),
        }),
        ('Storefront', {
            'fields': ('ticker_text', 'ticker_enabled', 'logo'),
        }),
    )

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AutomationLease)
class AutomationLeaseAdmin(admin.ModelAdmin):
    """Lets an operator inspect, or clear, a stuck batch lease."""

    list_display = ('name', 'token', 'expires_at')
    readonly_fields = ('name',)
