"""
Computed (never persisted) outcomes of promotion evaluation.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class PromotionResult:
    promotion_id: int
    promotion_name: str
    discount_amount: Decimal
    type: str
    applied: bool
    reason: Optional[str] = None

    def to_dict(self):
        return {
            'promotion_id': self.promotion_id,
            'promotion_name': self.promotion_name,
            'discount_amount': str(self.discount_amount),
            'type': self.type,
            'applied': self.applied,
            'reason': self.reason,
        }


@dataclass
class CouponValidation:
    """Outcome of validating a coupon code; invalid results carry a displayable reason"""
    valid: bool
    promotion: Optional[object] = None
    discount: Optional[Decimal] = None
    reason: Optional[str] = None

    @classmethod
    def rejected(cls, reason):
        return cls(valid=False, reason=reason)

    def to_dict(self):
        data = {'valid': self.valid}
        if self.valid:
            data['promotion_id'] = self.promotion.pk
            data['promotion_name'] = self.promotion.name
            data['type'] = self.promotion.type
            data['coupon_code'] = self.promotion.coupon_code
            data['discount'] = str(self.discount)
        else:
            data['reason'] = self.reason
        return data


@dataclass
class PromotionApplication:
    discount: Decimal
    final_amount: Decimal
    free_shipping: bool

    def to_dict(self):
        return {
            'discount': str(self.discount),
            'final_amount': str(self.final_amount),
            'free_shipping': self.free_shipping,
        }
