from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class BankAccount:
    account_id: int
    church_id: str
    bank_name: str
    agency: str
    account_number: str
    account_type: str
    initial_balance: Decimal
    initial_balance_date: Optional[date] = None

    @property
    def label(self) -> str:
        return f"{self.bank_name} - {self.account_number}"


@dataclass(frozen=True)
class Transfer:
    """Read-model of a transfer journal entry (debit = destination)."""

    entry_id: int
    transfer_date: date
    amount: Decimal
    source_account: str
    destination_account: str
    history: str
