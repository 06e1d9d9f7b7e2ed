"""
Discount calculation for a single promotion against a cart subtotal.

Everything here is pure: no database access, no hidden state. A promotion
that cannot be evaluated (missing or malformed fields, unknown type, not
live) contributes a zero discount instead of raising, so a broken promotion
never blocks checkout.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Mapping, Optional

from apps.common.utils import to_money
from ..models import Promotion
from .applicability import filter_applicable_items, is_promotion_applicable
from .cart import CartItem, calculate_subtotal
from .results import PromotionApplication

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
HUNDRED = Decimal('100')


def _to_decimal(value) -> Decimal:
    return Decimal(str(value))


def _percentage_discount(promotion, base):
    discount = base * _to_decimal(promotion.discount_value) / HUNDRED
    if promotion.max_discount_amount is not None:
        discount = min(discount, _to_decimal(promotion.max_discount_amount))
    return discount


def _fixed_discount(promotion, base):
    return min(_to_decimal(promotion.discount_value), base)


def _free_shipping_discount(promotion, base):
    # Shipping waiver is reported by apply_promotion, not as a price reduction
    return ZERO


def _unsupported_discount(promotion, base):
    logger.debug(f"Promotion {promotion.pk}: '{promotion.type}' discounts are not supported yet")
    return ZERO


DISCOUNT_HANDLERS = {
    Promotion.TYPE_PERCENTAGE: _percentage_discount,
    Promotion.TYPE_FIXED: _fixed_discount,
    Promotion.TYPE_FREE_SHIPPING: _free_shipping_discount,
    Promotion.TYPE_BUY_X_GET_Y: _unsupported_discount,
    Promotion.TYPE_BUNDLE: _unsupported_discount,
}


def discount_base(promotion, subtotal: Decimal, items: Optional[Iterable[CartItem]] = None) -> Decimal:
    """
    Amount the discount is computed against.

    Scoped promotions evaluated with cart items only discount the lines in
    scope; otherwise the whole subtotal is the base.
    """
    if items is None or promotion.applicable_to == Promotion.APPLICABLE_ALL:
        return subtotal
    matching = filter_applicable_items(promotion, items)
    return min(calculate_subtotal(matching), subtotal)


def _calculate(promotion, subtotal, items, now):
    if not promotion.is_live(now):
        return ZERO

    subtotal = _to_decimal(subtotal)
    if subtotal < 0:
        logger.warning(f"Negative subtotal {subtotal} passed for promotion {promotion.pk}")
        return ZERO

    if promotion.min_purchase_amount is not None and subtotal < _to_decimal(promotion.min_purchase_amount):
        return ZERO

    base = discount_base(promotion, subtotal, items)
    if base <= 0:
        return ZERO

    handler = DISCOUNT_HANDLERS.get(promotion.type)
    if handler is None:
        logger.warning(f"Promotion {promotion.pk} has unknown type '{promotion.type}'")
        return ZERO

    discount = to_money(max(ZERO, handler(promotion, base)))
    return min(discount, base)


def calculate_discount(promotion, subtotal, items: Optional[Iterable[CartItem]] = None, now=None) -> Decimal:
    """Discount in [0, subtotal] that the promotion yields right now"""
    if items is not None:
        items = list(items)
    try:
        return _calculate(promotion, subtotal, items, now)
    except (TypeError, ValueError, InvalidOperation) as e:
        logger.warning(f"Promotion {getattr(promotion, 'pk', None)} could not be evaluated, no discount applied: {e}")
        return ZERO


def apply_promotion(promotion, subtotal, items: Optional[Iterable[CartItem]] = None, now=None) -> PromotionApplication:
    """Discount, amount left to pay, and whether shipping is waived"""
    if items is not None:
        items = list(items)

    discount = calculate_discount(promotion, subtotal, items, now)
    try:
        final_amount = max(ZERO, to_money(subtotal) - discount)
    except (TypeError, ValueError, InvalidOperation):
        final_amount = ZERO

    free_shipping = False
    if promotion.type == Promotion.TYPE_FREE_SHIPPING and promotion.is_live(now):
        in_scope = items is None or is_promotion_applicable(promotion, items, now)
        meets_minimum = (
            promotion.min_purchase_amount is None
            or to_money(subtotal) >= _to_decimal(promotion.min_purchase_amount)
        )
        free_shipping = in_scope and meets_minimum

    return PromotionApplication(discount=discount, final_amount=final_amount, free_shipping=free_shipping)


def distribute_discount(seller_totals: Mapping[str, object], discount) -> Dict[str, Decimal]:
    """
    Split a cart-level discount across per-seller sub-orders.

    Each seller gets a share proportional to its total; the last seller takes
    whatever remains so the shares add up to the discount exactly. Totals never
    drop below zero.
    """
    totals = {seller: to_money(total) for seller, total in seller_totals.items()}
    discount = to_money(discount)
    grand_total = sum(totals.values(), ZERO)

    if not totals or discount <= 0 or grand_total <= 0:
        return totals

    discount = min(discount, grand_total)
    remaining = discount
    last_index = len(totals) - 1
    reduced = {}

    for index, (seller, total) in enumerate(totals.items()):
        if index == last_index:
            share = remaining
        else:
            share = min(to_money(total / grand_total * discount), remaining)
        remaining -= share
        reduced[seller] = max(ZERO, total - share)

    return reduced
