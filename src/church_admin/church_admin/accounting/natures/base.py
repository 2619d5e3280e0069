from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...core.enums import AccountNature


class NatureRule(ABC):
    """Strategy Pattern: how an account's balance moves with debits and credits."""

    nature: AccountNature

    @abstractmethod
    def closing(self, *, opening: Decimal, debits: Decimal, credits: Decimal) -> Decimal:
        raise NotImplementedError

    def signed(self, net_debit: Decimal) -> Decimal:
        """Express a raw (debits - credits) balance in this nature."""
        return self.closing(opening=Decimal("0"), debits=net_debit, credits=Decimal("0"))
