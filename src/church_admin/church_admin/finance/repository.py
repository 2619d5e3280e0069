from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import BankAccount


class BankAccountRepository(Protocol):
    def create(
        self,
        *,
        church_id: str,
        bank_name: str,
        agency: str,
        account_number: str,
        account_type: str,
        initial_balance: Decimal,
        initial_balance_date: Optional[date],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, *, church_id: str, account_id: int) -> Optional[BankAccount]:
        raise NotImplementedError

    def list_for_church(self, *, church_id: str) -> Sequence[BankAccount]:
        raise NotImplementedError


class FinancialEntryRepository(Protocol):
    """Entradas financeiras (feeds the financial dashboard)."""

    def create(
        self,
        *,
        church_id: str,
        entry_date: date,
        kind: str,
        description: str,
        amount: Decimal,
        payment_account: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
