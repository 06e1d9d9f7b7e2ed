"""
Promotion services module.

All services are exported from this module so callers import from one place.
"""
from .cart import CartItem, calculate_subtotal
from .results import PromotionResult, CouponValidation, PromotionApplication
from .applicability import is_promotion_applicable, item_matches_scope, filter_applicable_items
from .discount_calculator import calculate_discount, apply_promotion, distribute_discount
from .promotion_repository import PromotionRepository
from .promotion_service import PromotionService

__all__ = [
    'CartItem',
    'calculate_subtotal',
    'PromotionResult',
    'CouponValidation',
    'PromotionApplication',
    'is_promotion_applicable',
    'item_matches_scope',
    'filter_applicable_items',
    'calculate_discount',
    'apply_promotion',
    'distribute_discount',
    'PromotionRepository',
    'PromotionService',
]
