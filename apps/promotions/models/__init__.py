"""
Promotion models module.
"""
from .promotion import Promotion
from .coupon_usage import CouponUsage

__all__ = [
    'Promotion',
    'CouponUsage',
]
