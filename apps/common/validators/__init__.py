"""
Common validators module.

All validators are exported from this module so serializers can import them
from one place.
"""
from .money_validators import (
    validate_non_negative_amount, validate_quantity, validate_coupon_code
)

__all__ = [
    'validate_non_negative_amount',
    'validate_quantity',
    'validate_coupon_code',
]
