"""Orders API views for the admin panel.

Orders are read-only here: they are created by checkout or by the automation
engine and never edited afterwards.
"""

from decimal import Decimal

from django.db.models import Count, Sum
from django.utils import timezone
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from products.views import StandardResultsSetPagination
from .models import Order
from .serializers import OrderSerializer


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """List and inspect orders (staff only).

    Supports filtering by ``order_type`` and ``city``, search on code, name
    and phone, and optional ``date_from``/``date_to`` query params.
    """

    permission_classes = [permissions.IsAdminUser]
    serializer_class = OrderSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['order_type', 'city']
    search_fields = ['order_code', 'customer_name', 'phone_number']
    ordering_fields = ['created_at', 'total_amount']
    ordering = ['-created_at']

    def get_queryset(self):
        orders = Order.objects.prefetch_related('items')

        date_from = parse_date(self.request.query_params.get('date_from') or '')
        if date_from:
            orders = orders.filter(created_at__date__gte=date_from)

        date_to = parse_date(self.request.query_params.get('date_to') or '')
        if date_to:
            orders = orders.filter(created_at__date__lte=date_to)

        return orders

    @action(detail=False, methods=['get'], url_path='stats')
    def stats(self, request):
        """Order count and revenue since midnight (UTC), split by order type."""
        today = timezone.now().date()
        todays = Order.objects.filter(created_at__date__gte=today)
        totals = todays.aggregate(orders=Count('id'), revenue=Sum('total_amount'))
        by_type = {
            row['order_type']: row['orders']
            for row in todays.values('order_type').annotate(orders=Count('id'))
        }
        return Response({
            'date': today.isoformat(),
            'orders': totals['orders'] or 0,
            'revenue': str(totals['revenue'] or Decimal('0.00')),
            'by_type': by_type,
        })
