"""
Promotion service: coupon validation, best-offer selection and usage recording.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from django.db import DatabaseError, transaction

from apps.common.exceptions import PromotionUsageError
from ..models import Promotion
from .applicability import is_promotion_applicable
from .cart import CartItem
from .discount_calculator import calculate_discount
from .promotion_repository import PromotionRepository
from .results import CouponValidation, PromotionResult

logger = logging.getLogger(__name__)

REASON_NOT_FOUND = 'Coupon code not found or expired'
REASON_USAGE_LIMIT = 'Coupon usage limit reached'
REASON_USER_LIMIT = 'Per-user limit reached for this coupon'
REASON_MIN_PURCHASE = 'Minimum purchase amount is {amount}'
REASON_NOT_APPLICABLE = 'Coupon is not applicable to your cart contents'
REASON_UNAVAILABLE = 'Coupon validation is temporarily unavailable'
REASON_INVALID_SUBTOTAL = 'Cart subtotal is not a valid amount'
REASON_NO_DISCOUNT = 'Promotion yields no discount for this cart'


class PromotionService:
    """Service for evaluating and redeeming promotions"""

    @staticmethod
    def get_active_promotions(applicable_to=None, applicable_id=None, now=None) -> List[Promotion]:
        """Live promotions, optionally limited to one scope and scope member"""
        try:
            return PromotionRepository.find_active_promotions(
                applicable_to=applicable_to,
                applicable_id=applicable_id,
                now=now,
            )
        except DatabaseError:
            logger.exception("Failed to load active promotions")
            return []

    @staticmethod
    def user_limit_reached(promotion: Promotion, user_id) -> bool:
        """True when user_id has used the promotion's coupon user_limit times"""
        if user_id is None or promotion.user_limit is None or not promotion.coupon_code:
            return False
        used = PromotionRepository.count_usage(promotion.coupon_code, user_id)
        return used >= promotion.user_limit

    @staticmethod
    def validate_coupon_code(code, subtotal, items: Iterable[CartItem], user_id=None, now=None) -> CouponValidation:
        """
        Check whether a coupon can be redeemed on this cart right now.

        Checks run in a fixed order and the first failure is reported:
        existence/liveness, global usage limit, per-user limit, minimum
        purchase, applicability to the cart.
        """
        items = list(items or [])
        try:
            subtotal = Decimal(str(subtotal))
        except (TypeError, ValueError, InvalidOperation):
            logger.warning(f"Coupon {code!r} checked against invalid subtotal {subtotal!r}")
            return CouponValidation.rejected(REASON_INVALID_SUBTOTAL)
        if not subtotal.is_finite():
            return CouponValidation.rejected(REASON_INVALID_SUBTOTAL)

        try:
            promotion = PromotionRepository.get_by_coupon_code(code, now)
            if promotion is None:
                return CouponValidation.rejected(REASON_NOT_FOUND)

            if promotion.usage_limit_reached:
                return CouponValidation.rejected(REASON_USAGE_LIMIT)

            if PromotionService.user_limit_reached(promotion, user_id):
                return CouponValidation.rejected(REASON_USER_LIMIT)
        except DatabaseError:
            logger.exception(f"Failed to validate coupon code {code!r}")
            return CouponValidation.rejected(REASON_UNAVAILABLE)

        if promotion.min_purchase_amount is not None and subtotal < Decimal(str(promotion.min_purchase_amount)):
            return CouponValidation.rejected(REASON_MIN_PURCHASE.format(amount=promotion.min_purchase_amount))

        if not is_promotion_applicable(promotion, items, now):
            return CouponValidation.rejected(REASON_NOT_APPLICABLE)

        discount = calculate_discount(promotion, subtotal, items, now)
        logger.info(f"Coupon {promotion.coupon_code} validated: discount {discount} on subtotal {subtotal}")
        return CouponValidation(valid=True, promotion=promotion, discount=discount)

    @staticmethod
    def build_result(promotion: Promotion, subtotal, items: List[CartItem], now=None) -> PromotionResult:
        discount = calculate_discount(promotion, subtotal, items, now)
        applied = discount > 0
        return PromotionResult(
            promotion_id=promotion.pk,
            promotion_name=promotion.name,
            discount_amount=discount,
            type=promotion.type,
            applied=applied,
            reason=None if applied else REASON_NO_DISCOUNT,
        )

    @staticmethod
    def find_best_promotion(subtotal, items: Iterable[CartItem], coupon_code=None,
                            user_id=None, now=None) -> Optional[PromotionResult]:
        """
        Pick the live, applicable promotion with the largest discount.

        Candidates are scanned in repository order and a later candidate only
        wins with a strictly larger discount, so ties go to the first one.
        Returns None when nothing applies or every discount is zero.
        """
        items = list(items or [])
        coupon_code = PromotionRepository.normalize_code(coupon_code) or None

        try:
            candidates = PromotionRepository.find_active_promotions(coupon_code=coupon_code, now=now)
            if not candidates:
                return None

            if user_id is not None:
                candidates = [
                    promotion for promotion in candidates
                    if not promotion.usage_limit_reached
                    and not PromotionService.user_limit_reached(promotion, user_id)
                ]
        except DatabaseError:
            logger.exception("Failed to load promotions for best-offer selection")
            return None

        applicable = [promotion for promotion in candidates if is_promotion_applicable(promotion, items, now)]
        if not applicable:
            return None

        results = [PromotionService.build_result(promotion, subtotal, items, now) for promotion in applicable]

        best = results[0]
        for result in results[1:]:
            if result.discount_amount > best.discount_amount:
                best = result

        if not best.applied:
            return None

        logger.debug(f"Best promotion {best.promotion_id} yields {best.discount_amount}")
        return best

    @staticmethod
    def apply_promotion_to_order(order_id, promotion_id, user_id, coupon_code=None, discount_amount=None) -> bool:
        """
        Record a coupon redemption for an order.

        The usage row and the usage counter increment commit together or not
        at all. Code-less promotions are not tracked per redemption.
        """
        if not coupon_code:
            return True

        try:
            with transaction.atomic():
                PromotionRepository.record_usage(
                    coupon_code=coupon_code,
                    user_id=user_id,
                    order_id=order_id,
                    promotion_id=promotion_id,
                    discount_amount=discount_amount,
                )
                if not PromotionRepository.increment_usage_count(promotion_id, coupon_code):
                    raise PromotionUsageError(
                        promotion_id, "Promotion missing, usage limit reached or coupon code mismatch"
                    )
        except PromotionUsageError as e:
            logger.warning(f"Coupon {coupon_code} not applied to order {order_id}: {e}")
            return False
        except DatabaseError:
            logger.exception(f"Failed to apply promotion {promotion_id} to order {order_id}")
            return False

        logger.info(f"Coupon {coupon_code} applied to order {order_id} by user {user_id}")
        return True
