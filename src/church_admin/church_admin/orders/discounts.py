"""Discount calculator for curriculum orders.

Only one discount applies per order. Rules are tried in priority order:
category discounts, the salesperson's discount, ADVEC clients, churches that
finished onboarding, resellers.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from ..core.enums import DiscountKind
from .model import CartItem, DiscountQuote

_CENTS = Decimal("0.01")
_HUNDRED = Decimal("100")

# Titles sold at 50% to ADVEC clients (matched as lowercase substrings).
ADVEC_HALF_PRICE_TITLES = (
    "evangelho de joão",
    "evangelho de joao",
    "milagre do novo nascimento",
    "carta aos efésios",
    "carta aos efesios",
)
ADVEC_SPECIAL_PERCENT = Decimal("50")
ADVEC_DEFAULT_PERCENT = Decimal("40")

# (minimum subtotal, percentage, tier); checked from the highest threshold down.
SETUP_TIERS = (
    (Decimal("501"), Decimal("30"), "Premium"),
    (Decimal("301"), Decimal("25"), "Avançado"),
    (Decimal("0.01"), Decimal("20"), "Básico"),
)
RESELLER_TIERS = (
    (Decimal("699.90"), Decimal("30"), "Ouro"),
    (Decimal("499.90"), Decimal("25"), "Prata"),
    (Decimal("299.90"), Decimal("20"), "Bronze"),
)


def _cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _pct_label(value: Decimal) -> str:
    return f"{value.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}%"


def is_advec_client(client_type: Optional[str]) -> bool:
    return "ADVEC" in (client_type or "").upper()


def is_church_client(client_type: Optional[str]) -> bool:
    """Igreja, CPF or CNPJ clients that are not ADVEC."""
    upper = (client_type or "").upper()
    return any(tag in upper for tag in ("IGREJA", "CNPJ", "CPF")) and "ADVEC" not in upper


def is_reseller_client(client_type: Optional[str]) -> bool:
    return (client_type or "").strip().upper() == "REVENDEDOR"


def is_advec_half_price(title: str) -> bool:
    lowered = (title or "").lower()
    return any(term in lowered for term in ADVEC_HALF_PRICE_TITLES)


def tier_for(subtotal: Decimal, tiers) -> tuple[Decimal, str]:
    for minimum, percentage, label in tiers:
        if subtotal >= minimum:
            return percentage, label
    return Decimal("0"), ""


def _flat(subtotal: Decimal, percentage: Decimal, kind: DiscountKind, tier: str) -> DiscountQuote:
    amount = _cents(subtotal * percentage / _HUNDRED)
    return DiscountQuote(
        subtotal=_cents(subtotal),
        percentage=percentage,
        amount=amount,
        total=_cents(subtotal) - amount,
        kind=kind,
        tier=tier,
    )


def _per_item(subtotal: Decimal, discounted: Decimal, kind: DiscountKind, label: str) -> DiscountQuote:
    amount = _cents(subtotal - discounted)
    percentage = _cents(amount * _HUNDRED / subtotal) if subtotal > 0 else Decimal("0")
    return DiscountQuote(
        subtotal=_cents(subtotal),
        percentage=percentage,
        amount=amount,
        total=_cents(subtotal) - amount,
        kind=kind,
        tier=f"{label} ({_pct_label(percentage)})",
    )


def calculate_discount(
    items: Sequence[CartItem],
    *,
    client_type: Optional[str] = None,
    onboarding_done: bool = False,
    salesperson_discount: Decimal = Decimal("0"),
    category_discounts: Optional[Mapping[str, Decimal]] = None,
) -> DiscountQuote:
    subtotal = sum((item.line_total for item in items), Decimal("0"))
    salesperson_discount = Decimal(salesperson_discount or 0)

    if category_discounts and any(Decimal(v) > 0 for v in category_discounts.values()):
        discounted = sum(
            (
                item.line_total * (1 - Decimal(category_discounts.get(item.category or "", 0)) / _HUNDRED)
                for item in items
            ),
            Decimal("0"),
        )
        return _per_item(subtotal, discounted, DiscountKind.CATEGORY, "Por Categoria")

    if salesperson_discount > 0:
        return _flat(
            subtotal, salesperson_discount, DiscountKind.SALESPERSON, f"Vendedor ({_pct_label(salesperson_discount)})"
        )

    if is_advec_client(client_type):
        discounted = sum(
            (
                item.line_total
                * (1 - (ADVEC_SPECIAL_PERCENT if is_advec_half_price(item.title) else ADVEC_DEFAULT_PERCENT) / _HUNDRED)
                for item in items
            ),
            Decimal("0"),
        )
        return _per_item(subtotal, discounted, DiscountKind.ADVEC, "ADVEC")

    if is_church_client(client_type) and onboarding_done:
        percentage, label = tier_for(subtotal, SETUP_TIERS)
        return _flat(subtotal, percentage, DiscountKind.SETUP, f"{label} ({_pct_label(percentage)})" if label else "")

    if is_reseller_client(client_type):
        percentage, label = tier_for(subtotal, RESELLER_TIERS)
        return _flat(subtotal, percentage, DiscountKind.RESELLER, f"{label} ({_pct_label(percentage)})" if label else "")

    return _flat(subtotal, Decimal("0"), DiscountKind.NONE, "")
