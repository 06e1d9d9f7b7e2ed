"""
Tests for matching promotion scopes against cart contents.
"""
from decimal import Decimal
from hypothesis import given, strategies as st, settings

from apps.promotions.models import Promotion
from apps.promotions.services import (
    CartItem, calculate_subtotal, filter_applicable_items, is_promotion_applicable, item_matches_scope,
)
from tests.factories import PromotionFactory, make_item


class TestIsPromotionApplicable:

    def test_category_scope_matches_when_any_item_in_scope(self):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_CATEGORY, applicable_ids=['B']
        )
        cart = [make_item(category_id='A'), make_item(product_id='p2', category_id='B')]
        assert is_promotion_applicable(promotion, cart) is True

    def test_category_scope_without_overlap(self):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_CATEGORY, applicable_ids=['C']
        )
        cart = [make_item(category_id='A'), make_item(product_id='p2', category_id='B')]
        assert is_promotion_applicable(promotion, cart) is False

    def test_all_scope_matches_empty_cart(self):
        promotion = PromotionFactory.build(applicable_to=Promotion.APPLICABLE_ALL)
        assert is_promotion_applicable(promotion, []) is True

    def test_scoped_promotion_never_matches_empty_cart(self):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_PRODUCT, applicable_ids=['p1']
        )
        assert is_promotion_applicable(promotion, []) is False

    def test_empty_scope_ids_match_nothing(self, mixed_cart):
        promotion = PromotionFactory.build(applicable_to=Promotion.APPLICABLE_SELLER, applicable_ids=[])
        assert is_promotion_applicable(promotion, mixed_cart) is False

    def test_product_scope(self, mixed_cart):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_PRODUCT, applicable_ids=['novel']
        )
        assert is_promotion_applicable(promotion, mixed_cart) is True

    def test_seller_scope(self, mixed_cart):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_SELLER, applicable_ids=['seller_a', 'seller_x']
        )
        assert is_promotion_applicable(promotion, mixed_cart) is True

    def test_numeric_ids_match_string_item_ids(self):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_CATEGORY, applicable_ids=[7, 12]
        )
        assert is_promotion_applicable(promotion, [make_item(category_id='12')]) is True

    def test_item_without_category_never_matches_category_scope(self):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_CATEGORY, applicable_ids=['electronics']
        )
        assert is_promotion_applicable(promotion, [make_item(category_id=None)]) is False

    def test_inactive_promotion_is_not_applicable(self, mixed_cart):
        promotion = PromotionFactory.build(is_active=False)
        assert is_promotion_applicable(promotion, mixed_cart) is False

    def test_expired_promotion_is_not_applicable(self, mixed_cart, past):
        promotion = PromotionFactory.build(start_date=past, end_date=past)
        assert is_promotion_applicable(promotion, mixed_cart) is False

    def test_unknown_scope_matches_nothing(self, mixed_cart):
        promotion = PromotionFactory.build(applicable_to='warehouse', applicable_ids=['seller_a'])
        assert is_promotion_applicable(promotion, mixed_cart) is False


class TestScopeFiltering:

    def test_filter_keeps_only_matching_lines(self, mixed_cart):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_SELLER, applicable_ids=['seller_b']
        )
        matching = filter_applicable_items(promotion, mixed_cart)
        assert [item.product_id for item in matching] == ['novel']
        assert calculate_subtotal(matching) == Decimal('50.00')

    def test_all_scope_keeps_every_line(self, mixed_cart):
        promotion = PromotionFactory.build()
        assert filter_applicable_items(promotion, mixed_cart) == mixed_cart

    def test_item_matches_scope_ignores_liveness(self):
        promotion = PromotionFactory.build(
            is_active=False, applicable_to=Promotion.APPLICABLE_PRODUCT, applicable_ids=['p1']
        )
        assert item_matches_scope(promotion, make_item(product_id='p1')) is True


class TestCartItem:

    def test_from_dict_normalizes_types(self):
        item = CartItem.from_dict({
            'product_id': 42, 'seller_id': 7, 'price': '9.99', 'quantity': '3', 'category_id': 5,
        })
        assert item == CartItem(product_id='42', seller_id='7', price=Decimal('9.99'), quantity=3, category_id='5')
        assert item.line_total == Decimal('29.97')

    def test_from_dict_without_category(self):
        item = CartItem.from_dict({'product_id': 'p', 'seller_id': 's', 'price': 1, 'quantity': 1})
        assert item.category_id is None

    def test_subtotal_of_mixed_cart(self, mixed_cart):
        assert calculate_subtotal(mixed_cart) == Decimal('120.00')

    def test_subtotal_of_empty_cart(self):
        assert calculate_subtotal([]) == Decimal('0')


class TestApplicabilityProperties:

    @given(
        cart_categories=st.lists(st.sampled_from(['A', 'B', 'C', 'D']), max_size=6),
        scope_ids=st.lists(st.sampled_from(['A', 'B', 'C', 'D']), max_size=4),
    )
    @settings(max_examples=100, deadline=None)
    def test_match_is_existential_over_items(self, cart_categories, scope_ids):
        promotion = PromotionFactory.build(
            applicable_to=Promotion.APPLICABLE_CATEGORY, applicable_ids=scope_ids
        )
        cart = [
            make_item(product_id=f"p{index}", category_id=category)
            for index, category in enumerate(cart_categories)
        ]
        expected = bool(set(cart_categories) & set(scope_ids))
        assert is_promotion_applicable(promotion, cart) is expected
