from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Account, JournalEntry


class ChartOfAccountsRepository(Protocol):
    """Plano de contas (shared by every church)."""

    def list_all(self) -> Sequence[Account]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Account]:
        raise NotImplementedError


class JournalRepository(Protocol):
    """Lançamentos contábeis, always scoped by church."""

    def list_between(self, *, church_id: str, start: date, end: date) -> Sequence[JournalEntry]:
        raise NotImplementedError

    def list_before(self, *, church_id: str, before: date) -> Sequence[JournalEntry]:
        """Entries strictly before `before` (opening balances)."""

        raise NotImplementedError

    def list_until(self, *, church_id: str, as_of: date) -> Sequence[JournalEntry]:
        raise NotImplementedError

    def list_by_history_prefix(self, *, church_id: str, prefix: str, limit: int) -> Sequence[JournalEntry]:
        raise NotImplementedError

    def create(
        self,
        *,
        church_id: str,
        entry_date: date,
        debit_account: str,
        credit_account: str,
        amount: Decimal,
        history: str,
        document: Optional[str] = None,
        financial_entry_id: Optional[int] = None,
        expense_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError
