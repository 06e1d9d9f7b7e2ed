"""
Persistence boundary for promotions and coupon usage.

All ORM access of the promotion engine goes through this class so the
queries the engine depends on are written down in one place.
"""
from typing import List, Optional

from django.db.models import F, Q
from django.utils import timezone

from ..models import Promotion, CouponUsage


class PromotionRepository:
    """Typed queries over Promotion and CouponUsage"""

    @staticmethod
    def normalize_code(coupon_code: Optional[str]) -> str:
        return (coupon_code or '').strip().upper()

    @staticmethod
    def live_queryset(now=None):
        now = now or timezone.now()
        return Promotion.objects.filter(
            is_active=True,
            start_date__lte=now,
            end_date__gte=now,
        )

    @staticmethod
    def find_active_promotions(coupon_code=None, applicable_to=None, applicable_id=None, now=None) -> List[Promotion]:
        """
        Live promotions, best nominal value first.

        Order is '-discount_value, id' so callers iterating the result get a
        stable order for tie-breaking.
        """
        queryset = PromotionRepository.live_queryset(now)

        if coupon_code:
            queryset = queryset.filter(coupon_code__iexact=PromotionRepository.normalize_code(coupon_code))

        if applicable_to and applicable_to != Promotion.APPLICABLE_ALL:
            queryset = queryset.filter(applicable_to=applicable_to)

        promotions = list(queryset.order_by('-discount_value', 'id'))

        # JSON containment lookups are not portable to SQLite, filter members here
        if applicable_to and applicable_to != Promotion.APPLICABLE_ALL and applicable_id is not None:
            member = str(applicable_id)
            promotions = [
                promotion for promotion in promotions
                if member in {str(value) for value in (promotion.applicable_ids or [])}
            ]

        return promotions

    @staticmethod
    def get_by_coupon_code(coupon_code, now=None) -> Optional[Promotion]:
        """Live promotion redeemable with this code, if any"""
        code = PromotionRepository.normalize_code(coupon_code)
        if not code:
            return None
        return PromotionRepository.live_queryset(now).filter(coupon_code__iexact=code).first()

    @staticmethod
    def count_usage(coupon_code, user_id) -> int:
        return CouponUsage.objects.filter(
            coupon_code__iexact=PromotionRepository.normalize_code(coupon_code),
            user_id=user_id,
        ).count()

    @staticmethod
    def record_usage(coupon_code, user_id, order_id, promotion_id, discount_amount=None) -> CouponUsage:
        return CouponUsage.objects.create(
            coupon_code=PromotionRepository.normalize_code(coupon_code),
            user_id=user_id,
            order_id=str(order_id),
            promotion_id=promotion_id,
            discount_amount=discount_amount,
        )

    @staticmethod
    def increment_usage_count(promotion_id, coupon_code=None) -> bool:
        """
        Atomic conditional increment executed as a single UPDATE.

        Returns False when no row was updated: the promotion does not exist,
        its usage limit is already reached, or coupon_code is given and is not
        the promotion's code.
        """
        queryset = Promotion.objects.filter(pk=promotion_id)
        if coupon_code is not None:
            queryset = queryset.filter(coupon_code__iexact=PromotionRepository.normalize_code(coupon_code))
        updated = queryset.filter(
            Q(usage_limit__isnull=True) | Q(usage_count__lt=F('usage_limit'))
        ).update(usage_count=F('usage_count') + 1, updated_at=timezone.now())
        return updated == 1

    @staticmethod
    def expired_queryset(now=None):
        now = now or timezone.now()
        return Promotion.objects.filter(is_active=True, end_date__lt=now)

    @staticmethod
    def deactivate_expired(now=None) -> int:
        """Flip is_active off for promotions whose window has ended"""
        now = now or timezone.now()
        return PromotionRepository.expired_queryset(now).update(is_active=False, updated_at=now)
