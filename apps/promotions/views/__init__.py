"""
Promotion views module.
"""
from .promotion_views import list_active_promotions
from .coupon_views import validate_coupon, best_offer, apply_to_order

__all__ = [
    'list_active_promotions',
    'validate_coupon',
    'best_offer',
    'apply_to_order',
]
