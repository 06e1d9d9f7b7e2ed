"""
Cart values consumed by the promotion engine.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class CartItem:
    """One cart line. The engine reads these and never mutates them."""
    product_id: str
    seller_id: str
    price: Decimal
    quantity: int
    category_id: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return Decimal(str(self.price)) * self.quantity

    @classmethod
    def from_dict(cls, data: Mapping) -> 'CartItem':
        """Build from serializer output or a plain dict"""
        category_id = data.get('category_id')
        return cls(
            product_id=str(data['product_id']),
            seller_id=str(data['seller_id']),
            price=Decimal(str(data['price'])),
            quantity=int(data['quantity']),
            category_id=str(category_id) if category_id is not None else None,
        )


def calculate_subtotal(items: Iterable[CartItem]) -> Decimal:
    """Sum of price x quantity over all lines"""
    total = Decimal('0.00')
    for item in items:
        total += item.line_total
    return total
