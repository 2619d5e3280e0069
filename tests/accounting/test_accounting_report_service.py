from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from src.church_admin.church_admin.accounting.model import Account, JournalEntry
from src.church_admin.church_admin.accounting.service import AccountingReportService
from src.church_admin.church_admin.core.enums import AccountNature, AccountType, JournalKind
from src.church_admin.church_admin.core.exceptions import ValidationError


class InMemoryChart:
    def __init__(self, accounts: list[Account]):
        self._accounts = {a.code: a for a in accounts}

    def list_all(self):
        return list(self._accounts.values())

    def get_by_code(self, code: str) -> Optional[Account]:
        return self._accounts.get(code)


class InMemoryJournal:
    def __init__(self, entries: list[JournalEntry]):
        self.entries = list(entries)

    def _for(self, church_id):
        return [e for e in self.entries if e.church_id == church_id]

    def list_between(self, *, church_id, start, end):
        return [e for e in self._for(church_id) if start <= e.entry_date <= end]

    def list_before(self, *, church_id, before):
        return [e for e in self._for(church_id) if e.entry_date < before]

    def list_until(self, *, church_id, as_of):
        return [e for e in self._for(church_id) if e.entry_date <= as_of]


CHART = [
    Account("1.1.1.01", "Caixa Geral", AccountNature.DEBTOR, AccountType.ANALYTIC),
    Account("3.1.1.01", "Patrimônio Social Inicial", AccountNature.CREDITOR, AccountType.ANALYTIC),
    Account("4.1.1.01", "Dízimos", AccountNature.CREDITOR, AccountType.ANALYTIC),
]


def _entry(entry_id, church_id, on, debit, credit, amount, **kw):
    return JournalEntry(
        entry_id=entry_id,
        church_id=church_id,
        entry_date=on,
        debit_account=debit,
        credit_account=credit,
        amount=Decimal(amount),
        history="x",
        **kw,
    )


def _service():
    journal = InMemoryJournal(
        [
            _entry(1, "c1", date(2024, 12, 1), "1.1.1.01", "3.1.1.01", "1000"),
            _entry(2, "c1", date(2025, 1, 10), "1.1.1.01", "4.1.1.01", "250", financial_entry_id=9),
            _entry(3, "c2", date(2025, 1, 10), "1.1.1.01", "4.1.1.01", "99999"),
        ]
    )
    return AccountingReportService(InMemoryChart(CHART), journal)


def test_trial_balance_is_scoped_to_the_church():
    report = _service().trial_balance(church_id="c1", start=date(2025, 1, 1), end=date(2025, 1, 31))

    cash = next(line for line in report.lines if line.code == "1.1.1.01")
    assert cash.opening == Decimal("1000")
    assert cash.closing == Decimal("1250")
    assert report.total_debits == Decimal("250")
    assert report.is_consistent


def test_balance_sheet_and_income_statement():
    service = _service()

    sheet = service.balance_sheet(church_id="c1", as_of=date(2024, 12, 31))
    assert sheet.total_assets == Decimal("1000")
    assert sheet.is_consistent

    dre = service.income_statement(church_id="c1", start=date(2025, 1, 1), end=date(2025, 1, 31))
    assert dre.result == Decimal("250")


def test_journal_csv_uses_filters():
    text = _service().journal_csv(
        church_id="c1",
        start=date(2025, 1, 1),
        end=date(2025, 1, 31),
        kind=JournalKind.INCOME,
    )
    lines = text.strip().split("\n")
    assert len(lines) == 2
    assert lines[1].endswith(";250.00")


@pytest.mark.parametrize(
    "start,end",
    [
        (None, date(2025, 1, 31)),
        (date(2025, 1, 1), None),
        (date(2025, 2, 1), date(2025, 1, 1)),
    ],
)
def test_invalid_period_is_rejected(start, end):
    with pytest.raises(ValidationError):
        _service().trial_balance(church_id="c1", start=start, end=end)


def test_church_is_required():
    with pytest.raises(ValidationError):
        _service().balance_sheet(church_id=None, as_of=date(2025, 1, 31))
