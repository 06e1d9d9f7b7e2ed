"""
Tests for the Promotion model, repository queries and the expiry command.
"""
import pytest
from datetime import timedelta
from decimal import Decimal
from io import StringIO
from django.core.management import call_command
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.promotions.models import Promotion, CouponUsage
from apps.promotions.services import PromotionRepository
from tests.factories import PromotionFactory, CouponPromotionFactory, CouponUsageFactory


@pytest.mark.django_db
class TestPromotionModel:

    def test_coupon_code_is_stored_upper_case(self):
        promotion = CouponPromotionFactory(coupon_code='  spring-24 ')
        promotion.refresh_from_db()
        assert promotion.coupon_code == 'SPRING-24'

    def test_blank_coupon_code_is_stored_as_null(self):
        first = PromotionFactory(coupon_code='')
        second = PromotionFactory(coupon_code='')
        assert first.coupon_code is None
        assert second.coupon_code is None

    def test_coupon_codes_are_unique(self):
        CouponPromotionFactory(coupon_code='ONLYONE')
        with pytest.raises(IntegrityError), transaction.atomic():
            CouponPromotionFactory(coupon_code='onlyone')

    def test_str(self):
        assert str(PromotionFactory.build(name='Sale')) == 'Sale'
        assert str(PromotionFactory.build(name='Sale', coupon_code='SALE')) == 'Sale (SALE)'

    def test_status(self, past, future):
        assert PromotionFactory.build().status == Promotion.STATUS_ACTIVE
        assert PromotionFactory.build(is_active=False).status == Promotion.STATUS_CANCELLED
        assert PromotionFactory.build(start_date=future, end_date=future).status == Promotion.STATUS_SCHEDULED
        assert PromotionFactory.build(start_date=past, end_date=past).status == Promotion.STATUS_EXPIRED

    def test_usage_limit_reached(self):
        assert PromotionFactory.build(usage_limit=None, usage_count=100).usage_limit_reached is False
        assert PromotionFactory.build(usage_limit=3, usage_count=2).usage_limit_reached is False
        assert PromotionFactory.build(usage_limit=3, usage_count=3).usage_limit_reached is True
        assert PromotionFactory.build(usage_limit=0, usage_count=0).usage_limit_reached is True

    def test_is_live_boundaries(self, now):
        promotion = PromotionFactory.build(start_date=now, end_date=now + timedelta(hours=1))
        assert promotion.is_live(now) is True
        assert promotion.is_live(now + timedelta(hours=1)) is True
        assert promotion.is_live(now - timedelta(seconds=1)) is False
        assert promotion.is_live(now + timedelta(hours=1, seconds=1)) is False

    def test_usage_history_protects_promotion(self):
        usage = CouponUsageFactory()
        with pytest.raises(ProtectedError):
            usage.promotion.delete()


@pytest.mark.django_db
class TestPromotionRepository:

    def test_find_active_orders_by_value_then_id(self):
        low = PromotionFactory(discount_value=Decimal('5'))
        high = PromotionFactory(discount_value=Decimal('20'))
        tie = PromotionFactory(discount_value=Decimal('5'))

        assert PromotionRepository.find_active_promotions() == [high, low, tie]

    def test_find_active_by_coupon_code(self):
        coupon = CouponPromotionFactory(coupon_code='HELLO')
        PromotionFactory()

        assert PromotionRepository.find_active_promotions(coupon_code='hello') == [coupon]

    def test_lookups_ignore_stored_code_case(self):
        coupon = CouponPromotionFactory(coupon_code='HELLO')
        Promotion.objects.filter(pk=coupon.pk).update(coupon_code='hello')

        assert PromotionRepository.find_active_promotions(coupon_code='HELLO') == [coupon]
        assert PromotionRepository.get_by_coupon_code('Hello') == coupon

    def test_get_by_coupon_code_ignores_non_live(self, past):
        CouponPromotionFactory(coupon_code='GONE', start_date=past, end_date=past)
        assert PromotionRepository.get_by_coupon_code('GONE') is None
        assert PromotionRepository.get_by_coupon_code('') is None
        assert PromotionRepository.get_by_coupon_code(None) is None

    def test_count_usage_per_user(self, shopper, other_shopper):
        promotion = CouponPromotionFactory(coupon_code='COUNTME')
        CouponUsageFactory(user=shopper, promotion=promotion)
        CouponUsageFactory(user=shopper, promotion=promotion)
        CouponUsageFactory(user=other_shopper, promotion=promotion)

        assert PromotionRepository.count_usage('countme', shopper.pk) == 2
        assert PromotionRepository.count_usage('COUNTME', other_shopper.pk) == 1

    def test_record_usage_normalizes_code(self, shopper):
        promotion = CouponPromotionFactory(coupon_code='ABC')
        usage = PromotionRepository.record_usage(' abc ', shopper.pk, 17, promotion.pk)
        assert usage.coupon_code == 'ABC'
        assert usage.order_id == '17'
        assert CouponUsage.objects.filter(promotion=promotion).count() == 1


@pytest.mark.django_db
class TestDeactivateExpiredCommand:

    def test_deactivates_only_ended_promotions(self, past):
        expired = PromotionFactory(start_date=past - timedelta(days=1), end_date=past)
        live = PromotionFactory()

        out = StringIO()
        call_command('deactivate_expired_promotions', stdout=out)

        expired.refresh_from_db()
        live.refresh_from_db()
        assert expired.is_active is False
        assert live.is_active is True
        assert 'Deactivated 1 expired promotions' in out.getvalue()

    def test_usage_history_is_kept(self, past):
        usage = CouponUsageFactory(
            promotion=CouponPromotionFactory(start_date=past - timedelta(days=1), end_date=past)
        )

        call_command('deactivate_expired_promotions', stdout=StringIO())

        assert CouponUsage.objects.filter(pk=usage.pk).exists()

    def test_dry_run_changes_nothing(self, past):
        expired = PromotionFactory(start_date=past - timedelta(days=1), end_date=past)

        out = StringIO()
        call_command('deactivate_expired_promotions', '--dry-run', stdout=out)

        expired.refresh_from_db()
        assert expired.is_active is True
        assert '1 expired promotions would be deactivated' in out.getvalue()
