"""
Money, quantity and coupon code validators.
"""
import re

from rest_framework import serializers

COUPON_CODE_PATTERN = re.compile(r'^[A-Za-z0-9_-]{3,50}$')


def validate_non_negative_amount(value):
    """
    Validate a money amount is not negative.

    Raises:
        serializers.ValidationError: If the amount is below zero

    Returns:
        decimal.Decimal: Validated amount
    """
    if value < 0:
        raise serializers.ValidationError("Amount must not be negative.")
    return value


def validate_quantity(value, min_value=1):
    """
    Validate quantity is positive and meets minimum requirement.

    Raises:
        serializers.ValidationError: If quantity is invalid

    Returns:
        int: Validated quantity
    """
    if value < min_value:
        raise serializers.ValidationError(f"Quantity must be at least {min_value}.")
    return value


def validate_coupon_code(value):
    """
    Validate and normalize a user-entered coupon code.

    Codes are 3-50 characters of letters, digits, '-' or '_' and are
    compared case-insensitively, so the normalized form is upper-case.
    """
    code = (value or '').strip()
    if not COUPON_CODE_PATTERN.match(code):
        raise serializers.ValidationError(
            "Coupon code must be 3-50 letters, digits, '-' or '_'."
        )
    return code.upper()
