"""Django admin configuration for orders."""

from django.contrib import admin

from .models import Order, OrderCodeSequence, OrderItem


class OrderItemInline(admin.TabularInline):
    """Inline display of order items."""

    model = OrderItem
    extra = 0
    # Historical prices are frozen.
    readonly_fields = ('product', 'product_name', 'unit_price', 'discount_percentage', 'quantity')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for orders."""

    list_display = ('order_code', 'customer_name', 'city', 'total_amount', 'order_type', 'created_at')
    list_filter = ('order_type', 'city', 'created_at')
    search_fields = ('order_code', 'customer_name', 'phone_number')
    readonly_fields = ('order_code', 'total_amount', 'order_type', 'payment_method', 'created_at')
    inlines = [OrderItemInline]


@admin.register(OrderCodeSequence)
class OrderCodeSequenceAdmin(admin.ModelAdmin):
    """Read-only view of the daily order code counters."""

    list_display = ('day', 'last_value')
    readonly_fields = ('day', 'last_value')
