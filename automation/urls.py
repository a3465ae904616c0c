from django.urls import path

from .views import (
    generate_order_view,
    public_site_settings_view,
    run_automation_view,
    site_settings_view,
)

urlpatterns = [
    path('automation/run/', run_automation_view, name='automation_run'),
    path('automation/generate/', generate_order_view, name='automation_generate'),
    path('automation/settings/', site_settings_view, name='automation_settings'),
    path('site-settings/', public_site_settings_view, name='public_site_settings'),
]
