"""
Cart and redemption request serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_non_negative_amount, validate_quantity
from apps.common.validators import validate_coupon_code as coupon_code_validator
from ..services import CartItem, calculate_subtotal


class CartItemSerializer(serializers.Serializer):
    """One cart line"""

    product_id = serializers.CharField(max_length=64)
    category_id = serializers.CharField(max_length=64, allow_null=True, default=None)
    seller_id = serializers.CharField(max_length=64)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, validators=[validate_non_negative_amount])
    quantity = serializers.IntegerField(validators=[validate_quantity])


class CartSerializer(serializers.Serializer):
    """Cart payload; subtotal defaults to the sum of the line totals"""

    items = CartItemSerializer(many=True)
    subtotal = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, validators=[validate_non_negative_amount]
    )
    coupon_code = serializers.CharField(max_length=50, required=False, allow_blank=True)

    def validate_coupon_code(self, value):
        if not value or not value.strip():
            return None
        return coupon_code_validator(value)

    def validate(self, attrs):
        attrs['cart_items'] = [CartItem.from_dict(item) for item in attrs['items']]
        if attrs.get('subtotal') is None:
            attrs['subtotal'] = calculate_subtotal(attrs['cart_items'])
        return attrs


class CouponValidateSerializer(CartSerializer):
    """Cart payload with a mandatory coupon code"""

    coupon_code = serializers.CharField(max_length=50, validators=[coupon_code_validator])

    def validate_coupon_code(self, value):
        return value.strip().upper()


class ApplyPromotionSerializer(serializers.Serializer):
    """Record a redemption once an order has been placed"""

    order_id = serializers.CharField(max_length=64)
    promotion_id = serializers.IntegerField(min_value=1)
    coupon_code = serializers.CharField(max_length=50, allow_blank=True, default='')
    discount_amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True,
        validators=[validate_non_negative_amount]
    )
    seller_totals = serializers.DictField(
        child=serializers.DecimalField(max_digits=12, decimal_places=2, validators=[validate_non_negative_amount]),
        required=False,
        help_text="Per-seller sub-order totals the discount is split across"
    )

    def validate_coupon_code(self, value):
        if not value.strip():
            return ''
        return coupon_code_validator(value)
