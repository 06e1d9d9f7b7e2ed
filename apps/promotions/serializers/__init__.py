"""
Promotion serializers module.
"""
from .promotion_serializers import PromotionSerializer, ActivePromotionQuerySerializer
from .cart_serializers import (
    CartItemSerializer, CartSerializer, CouponValidateSerializer, ApplyPromotionSerializer
)

__all__ = [
    'PromotionSerializer',
    'ActivePromotionQuerySerializer',
    'CartItemSerializer',
    'CartSerializer',
    'CouponValidateSerializer',
    'ApplyPromotionSerializer',
]
