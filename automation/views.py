"""Automation API endpoints for the admin panel.

- ``POST run/``: one scheduler tick (what the external cron calls).
- ``POST generate/``: a single generator call, bypassing the time window.
- ``GET/PATCH settings/``: read or change the site settings singleton.
- ``GET site-settings/``: public display fields for the storefront.
"""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from .errors import GenerationError, PersistenceFailure, UpstreamUnavailable
from .generator import OrderGenerator
from .models import SiteSettings
from .scheduler import AutomationRunResult, AutomationScheduler, SchedulerState
from .serializers import PublicSiteSettingsSerializer, SiteSettingsSerializer
from .settings_store import SettingsStore


@api_view(['POST'])
@permission_classes([IsAdminUser])
def run_automation_view(request):
    """Run one automation batch and report ``{success, generated, attempted}``."""
    try:
        scheduler = AutomationScheduler()
    except ValueError as exc:
        result = AutomationRunResult(False, SchedulerState.IDLE, message=str(exc))
        return Response(result.as_dict(), status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(scheduler.run().as_dict())


@api_view(['POST'])
@permission_classes([IsAdminUser])
def generate_order_view(request):
    """Generate exactly one AUTO order."""
    try:
        summary = OrderGenerator().generate()
    except (PersistenceFailure, UpstreamUnavailable) as exc:
        return Response(
            {'success': False, 'code': exc.code, 'message': exc.message},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    except GenerationError as exc:
        return Response({'success': False, 'code': exc.code, 'message': exc.message})
    return Response({'success': True, 'order': summary.as_dict()}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAdminUser])
def site_settings_view(request):
    """Read or partially update the automation/site settings."""
    instance = SiteSettings.load()
    if request.method == 'GET':
        return Response(SiteSettingsSerializer(instance, context={'request': request}).data)

    serializer = SiteSettingsSerializer(instance, data=request.data, partial=True, context={'request': request})
    serializer.is_valid(raise_exception=True)
    try:
        SettingsStore().update(**serializer.validated_data)
    except ValueError as exc:
        return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    instance.refresh_from_db()
    return Response(SiteSettingsSerializer(instance, context={'request': request}).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def public_site_settings_view(request):
    """Ticker and logo for the storefront header."""
    return Response(PublicSiteSettingsSerializer(SiteSettings.load(), context={'request': request}).data)
