from __future__ import annotations

from decimal import Decimal

from ...core.enums import AccountNature
from .base import NatureRule


class CreditorRule(NatureRule):
    """Creditor accounts (liabilities, equity, revenue) increase with credits."""

    nature = AccountNature.CREDITOR

    def closing(self, *, opening: Decimal, debits: Decimal, credits: Decimal) -> Decimal:
        return opening + credits - debits
