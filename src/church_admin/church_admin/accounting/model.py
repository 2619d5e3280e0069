from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AccountNature, AccountType

ZERO = Decimal("0")


@dataclass(frozen=True)
class Account:
    """Conta do plano de contas (chart of accounts entry)."""

    code: str
    name: str
    nature: AccountNature
    account_type: AccountType

    @property
    def level(self) -> int:
        return self.code.count(".")

    @property
    def is_synthetic(self) -> bool:
        return self.account_type == AccountType.SYNTHETIC

    def is_ancestor_of(self, code: str) -> bool:
        return code.startswith(self.code + ".")


@dataclass(frozen=True)
class JournalEntry:
    """Lançamento contábil: one debit account, one credit account, one amount."""

    entry_id: int
    church_id: str
    entry_date: date
    debit_account: str
    credit_account: str
    amount: Decimal
    history: str = ""
    document: Optional[str] = None
    financial_entry_id: Optional[int] = None
    expense_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TrialBalanceLine:
    code: str
    name: str
    nature: AccountNature
    account_type: AccountType
    opening: Decimal
    debits: Decimal
    credits: Decimal
    closing: Decimal


@dataclass(frozen=True)
class TrialBalance:
    start: date
    end: date
    lines: list[TrialBalanceLine]
    total_opening: Decimal
    total_debits: Decimal
    total_credits: Decimal
    total_closing: Decimal
    difference: Decimal
    is_consistent: bool


@dataclass(frozen=True)
class StatementLine:
    code: str
    name: str
    value: Decimal
    level: int
    account_type: AccountType


@dataclass(frozen=True)
class BalanceSheet:
    as_of: date
    assets: list[StatementLine]
    liabilities: list[StatementLine]
    equity: list[StatementLine]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    difference: Decimal
    is_consistent: bool

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity


@dataclass(frozen=True)
class IncomeStatement:
    start: date
    end: date
    revenues: list[StatementLine]
    expenses: list[StatementLine]
    total_revenues: Decimal
    total_expenses: Decimal
    result: Decimal

    @property
    def is_surplus(self) -> bool:
        return self.result >= 0

    @property
    def result_label(self) -> str:
        return "SUPERÁVIT DO PERÍODO" if self.is_surplus else "DÉFICIT DO PERÍODO"


@dataclass(frozen=True)
class JournalRow:
    """Read-model for the journal book (livro diário)."""

    entry: JournalEntry
    debit_account_name: Optional[str]
    credit_account_name: Optional[str]


@dataclass(frozen=True)
class JournalBook:
    start: date
    end: date
    rows: list[JournalRow] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((r.entry.amount for r in self.rows), ZERO)
