"""
Promotion serializers.
"""
from rest_framework import serializers
from ..models import Promotion


class PromotionSerializer(serializers.ModelSerializer):
    """Public representation of a promotion"""
    type_display = serializers.CharField(source='get_type_display', read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = Promotion
        fields = [
            'id', 'seller_id', 'name', 'description', 'type', 'type_display',
            'discount_value', 'min_purchase_amount', 'max_discount_amount',
            'applicable_to', 'applicable_ids', 'coupon_code',
            'usage_limit', 'usage_count', 'user_limit',
            'start_date', 'end_date', 'is_active', 'status'
        ]
        read_only_fields = fields


class ActivePromotionQuerySerializer(serializers.Serializer):
    """Query parameters for listing live promotions"""

    applicable_to = serializers.ChoiceField(choices=Promotion.APPLICABLE_TO_CHOICES, required=False)
    applicable_id = serializers.CharField(max_length=64, required=False)

    def validate(self, attrs):
        if attrs.get('applicable_id') and attrs.get('applicable_to', Promotion.APPLICABLE_ALL) == Promotion.APPLICABLE_ALL:
            raise serializers.ValidationError("applicable_id requires a category, product or seller scope")
        return attrs
