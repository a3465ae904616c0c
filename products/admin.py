"""Django admin configuration for the product catalog."""

from django.contrib import admin
from django.utils.html import format_html

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin configuration for products."""

    list_display = ('name', 'price', 'colored_discount', 'effective_price', 'updated_at')
    search_fields = ('name',)
    list_filter = ('discount_percentage',)
    readonly_fields = ('created_at', 'updated_at')

    def colored_discount(self, obj):
        """Highlight products currently on sale."""
        color = 'green' if obj.discount_percentage else 'gray'
        return format_html('<b style="color: {};">{}%</b>', color, obj.discount_percentage)

    colored_discount.short_description = 'Discount'
    colored_discount.admin_order_field = 'discount_percentage'
