"""
Applicability matching: does a promotion's scope intersect a cart?
"""
from typing import Iterable, List

from ..models import Promotion
from .cart import CartItem

SCOPE_ATTRIBUTES = {
    Promotion.APPLICABLE_CATEGORY: 'category_id',
    Promotion.APPLICABLE_PRODUCT: 'product_id',
    Promotion.APPLICABLE_SELLER: 'seller_id',
}


def _scope_ids(promotion):
    return {str(value) for value in (promotion.applicable_ids or [])}


def item_matches_scope(promotion, item: CartItem) -> bool:
    """True when the item belongs to the promotion's scope (all items match 'all')"""
    if promotion.applicable_to == Promotion.APPLICABLE_ALL:
        return True

    attribute = SCOPE_ATTRIBUTES.get(promotion.applicable_to)
    if attribute is None:
        return False

    value = getattr(item, attribute, None)
    if value is None:
        return False
    return str(value) in _scope_ids(promotion)


def filter_applicable_items(promotion, items: Iterable[CartItem]) -> List[CartItem]:
    return [item for item in items if item_matches_scope(promotion, item)]


def is_promotion_applicable(promotion, items: Iterable[CartItem], now=None) -> bool:
    """
    Existential match: a live promotion applies when at least one item is in scope.

    'all' promotions apply to any cart, including an empty one. A scoped
    promotion without scope members matches nothing.
    """
    if not promotion.is_live(now):
        return False

    if promotion.applicable_to == Promotion.APPLICABLE_ALL:
        return True

    if not promotion.applicable_ids:
        return False

    return any(item_matches_scope(promotion, item) for item in items)
