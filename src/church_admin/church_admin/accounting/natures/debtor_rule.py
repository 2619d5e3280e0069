from __future__ import annotations

from decimal import Decimal

from ...core.enums import AccountNature
from .base import NatureRule


class DebtorRule(NatureRule):
    """Debtor accounts (assets, expenses) increase with debits."""

    nature = AccountNature.DEBTOR

    def closing(self, *, opening: Decimal, debits: Decimal, credits: Decimal) -> Decimal:
        return opening + debits - credits
