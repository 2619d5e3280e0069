from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import DiscountKind


@dataclass(frozen=True)
class CartItem:
    item_id: str
    title: str
    unit_price: Decimal
    quantity: int
    category: Optional[str] = None
    gross_weight: Decimal = Decimal("0")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class DiscountQuote:
    """Result of the discount calculator; money values rounded to cents."""

    subtotal: Decimal
    percentage: Decimal
    amount: Decimal
    total: Decimal
    kind: DiscountKind
    tier: str = ""
