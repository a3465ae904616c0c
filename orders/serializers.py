"""DRF serializers for orders APIs."""

from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Purchased line with its denormalised product data."""

    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'product',
            'product_name',
            'unit_price',
            'discount_percentage',
            'quantity',
            'line_total',
            'created_at',
        ]


class OrderSerializer(serializers.ModelSerializer):
    """Order with its items, as listed in the admin panel."""

    items = OrderItemSerializer(many=True, read_only=True)
    items_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_code',
            'customer_name',
            'phone_number',
            'address',
            'city',
            'total_amount',
            'order_type',
            'payment_method',
            'created_at',
            'items_count',
            'items',
        ]
        read_only_fields = fields

    def get_items_count(self, obj):
        return len(obj.items.all())
