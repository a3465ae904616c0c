"""Serializers for the product catalog."""

from rest_framework import serializers

from .models import Product


def _image_value_to_url(value, *, request=None):
    """Return a usable URL for an ImageField value.

    Absolute URLs stored directly in the column are returned as-is; real media
    files go through ``.url`` (made absolute when a request is available).
    """

    if not value:
        return None

    raw = str(value)
    if raw.startswith('http://') or raw.startswith('https://'):
        return raw

    try:
        url = value.url
    except ValueError:
        return raw

    if request is not None:
        return request.build_absolute_uri(url)
    return url


class ProductSerializer(serializers.ModelSerializer):
    """Product with its discounted unit price."""

    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'price',
            'discount_percentage',
            'effective_price',
            'image',
            'image_url',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'image': {'write_only': True, 'required': False}}

    def get_image_url(self, obj):
        return _image_value_to_url(obj.image, request=self.context.get('request'))

    def validate_discount_percentage(self, value):
        if value < 0 or value > 100:
            raise serializers.ValidationError('Discount must be between 0 and 100.')
        return value
