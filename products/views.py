"""Products API views.

Public read access to the catalog; writes are reserved for the admin panel.
"""

from rest_framework import filters, viewsets
from rest_framework.pagination import PageNumberPagination

from .models import Product
from .permissions import IsStaffOrReadOnly
from .serializers import ProductSerializer


class StandardResultsSetPagination(PageNumberPagination):
    """Default pagination used by most API endpoints."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProductViewSet(viewsets.ModelViewSet):
    """Products CRUD.

    - Anyone: list and retrieve.
    - Staff: create, update, delete.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = StandardResultsSetPagination
    permission_classes = [IsStaffOrReadOnly]

    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering_fields = ['name', 'price', 'discount_percentage', 'created_at']
    ordering = ['-created_at']
