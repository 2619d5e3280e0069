"""Pure calculators for the accounting reports.

Inputs are plain model objects (accounts + journal entries already fetched by
a repository); outputs are the report read-models in `model.py`. Nothing here
touches the database.

Synthetic accounts aggregate the raw movement of their analytic descendants
(code prefix ``<code>.``) and express it in their own nature. Only analytic
accounts count toward report totals.
"""
from __future__ import annotations

import csv
import io
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_br_date
from ..core.constants import (
    ASSETS_PREFIX,
    BALANCE_TOLERANCE,
    EQUITY_PREFIX,
    EXPENSE_PREFIX,
    LIABILITIES_PREFIX,
    REVENUE_PREFIX,
)
from ..core.enums import AccountNature, AccountType, JournalKind
from .model import (
    ZERO,
    Account,
    BalanceSheet,
    IncomeStatement,
    JournalBook,
    JournalEntry,
    JournalRow,
    StatementLine,
    TrialBalance,
    TrialBalanceLine,
)
from .natures.factory import NatureRuleFactory

_DEFAULT_FACTORY = NatureRuleFactory()


def _sorted(accounts: Iterable[Account]) -> list[Account]:
    return sorted(accounts, key=lambda a: a.code)


def _net_by_account(entries: Iterable[JournalEntry]) -> dict[str, Decimal]:
    """Raw (debits - credits) per account code."""
    net: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for e in entries:
        net[e.debit_account] += e.amount
        net[e.credit_account] -= e.amount
    return net


def _movement_by_account(entries: Iterable[JournalEntry]) -> tuple[dict[str, Decimal], dict[str, Decimal]]:
    debits: dict[str, Decimal] = defaultdict(lambda: ZERO)
    credits: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for e in entries:
        debits[e.debit_account] += e.amount
        credits[e.credit_account] += e.amount
    return debits, credits


def _aggregate(account: Account, values: dict[str, Decimal], analytic_codes: Sequence[str]) -> Decimal:
    total = values.get(account.code, ZERO)
    if account.is_synthetic:
        total += sum((values.get(code, ZERO) for code in analytic_codes if account.is_ancestor_of(code)), ZERO)
    return total


def _analytic_codes(accounts: Sequence[Account]) -> list[str]:
    return [a.code for a in accounts if a.account_type == AccountType.ANALYTIC]


def compute_trial_balance(
    accounts: Iterable[Account],
    prior_entries: Iterable[JournalEntry],
    period_entries: Iterable[JournalEntry],
    *,
    start: date,
    end: date,
    factory: Optional[NatureRuleFactory] = None,
) -> TrialBalance:
    """Balancete de verificação for ``[start, end]``.

    ``prior_entries`` are the entries dated before ``start`` (opening balance);
    ``period_entries`` the entries inside the period.
    """
    factory = factory or _DEFAULT_FACTORY
    ordered = _sorted(accounts)
    analytic = _analytic_codes(ordered)

    prior_net = _net_by_account(prior_entries)
    debits, credits = _movement_by_account(period_entries)

    lines: list[TrialBalanceLine] = []
    total_opening = total_debits = total_credits = total_closing = ZERO

    for account in ordered:
        rule = factory.for_account(account)
        opening = rule.signed(_aggregate(account, prior_net, analytic))
        acc_debits = _aggregate(account, debits, analytic)
        acc_credits = _aggregate(account, credits, analytic)
        closing = rule.closing(opening=opening, debits=acc_debits, credits=acc_credits)

        has_activity = acc_debits > 0 or acc_credits > 0 or opening != 0
        if not (has_activity or account.is_synthetic):
            continue

        lines.append(
            TrialBalanceLine(
                code=account.code,
                name=account.name,
                nature=account.nature,
                account_type=account.account_type,
                opening=opening,
                debits=acc_debits,
                credits=acc_credits,
                closing=closing,
            )
        )
        if not account.is_synthetic:
            total_opening += opening
            total_debits += acc_debits
            total_credits += acc_credits
            total_closing += closing

    difference = abs(total_debits - total_credits)
    return TrialBalance(
        start=start,
        end=end,
        lines=lines,
        total_opening=total_opening,
        total_debits=total_debits,
        total_credits=total_credits,
        total_closing=total_closing,
        difference=difference,
        is_consistent=difference < BALANCE_TOLERANCE,
    )


def _statement_section(
    accounts: Sequence[Account],
    net: dict[str, Decimal],
    *,
    prefix: str,
    normal_nature: AccountNature,
    factory: NatureRuleFactory,
) -> tuple[list[StatementLine], Decimal]:
    root = prefix.rstrip(".")
    section = [a for a in accounts if a.code == root or a.code.startswith(prefix)]
    analytic = _analytic_codes(section)
    section_rule = factory.for_nature(normal_nature)

    lines: list[StatementLine] = []
    total = ZERO
    for account in section:
        raw = _aggregate(account, net, analytic)
        value = factory.for_account(account).signed(raw)
        if value == 0 and not account.is_synthetic:
            continue
        lines.append(
            StatementLine(
                code=account.code,
                name=account.name,
                value=value,
                level=account.level,
                account_type=account.account_type,
            )
        )
        if not account.is_synthetic:
            # Contra accounts (nature opposite to the section) reduce the total.
            total += section_rule.signed(raw)
    return lines, total


def compute_balance_sheet(
    accounts: Iterable[Account],
    entries: Iterable[JournalEntry],
    *,
    as_of: date,
    factory: Optional[NatureRuleFactory] = None,
) -> BalanceSheet:
    """Balanço patrimonial at ``as_of`` (inclusive)."""
    factory = factory or _DEFAULT_FACTORY
    ordered = _sorted(accounts)
    net = _net_by_account(e for e in entries if e.entry_date <= as_of)

    assets, total_assets = _statement_section(
        ordered, net, prefix=ASSETS_PREFIX, normal_nature=AccountNature.DEBTOR, factory=factory
    )
    liabilities, total_liabilities = _statement_section(
        ordered, net, prefix=LIABILITIES_PREFIX, normal_nature=AccountNature.CREDITOR, factory=factory
    )
    equity, total_equity = _statement_section(
        ordered, net, prefix=EQUITY_PREFIX, normal_nature=AccountNature.CREDITOR, factory=factory
    )

    difference = abs(total_assets - (total_liabilities + total_equity))
    return BalanceSheet(
        as_of=as_of,
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        difference=difference,
        is_consistent=difference < BALANCE_TOLERANCE,
    )


def compute_income_statement(
    accounts: Iterable[Account],
    entries: Iterable[JournalEntry],
    *,
    start: date,
    end: date,
    factory: Optional[NatureRuleFactory] = None,
) -> IncomeStatement:
    """DRE: revenues (4.1.) minus expenses (4.2.) over ``[start, end]``."""
    factory = factory or _DEFAULT_FACTORY
    ordered = _sorted(accounts)
    net = _net_by_account(e for e in entries if start <= e.entry_date <= end)

    revenues, total_revenues = _statement_section(
        ordered, net, prefix=REVENUE_PREFIX, normal_nature=AccountNature.CREDITOR, factory=factory
    )
    expenses, total_expenses = _statement_section(
        ordered, net, prefix=EXPENSE_PREFIX, normal_nature=AccountNature.DEBTOR, factory=factory
    )

    return IncomeStatement(
        start=start,
        end=end,
        revenues=revenues,
        expenses=expenses,
        total_revenues=total_revenues,
        total_expenses=total_expenses,
        result=total_revenues - total_expenses,
    )


def build_journal_book(
    accounts: Iterable[Account],
    entries: Iterable[JournalEntry],
    *,
    start: date,
    end: date,
    account_code: Optional[str] = None,
    kind: JournalKind = JournalKind.ALL,
) -> JournalBook:
    names = {a.code: a.name for a in accounts}

    selected = [e for e in entries if start <= e.entry_date <= end]
    if account_code:
        selected = [e for e in selected if account_code in (e.debit_account, e.credit_account)]
    if kind == JournalKind.INCOME:
        selected = [e for e in selected if e.financial_entry_id is not None]
    elif kind == JournalKind.EXPENSE:
        selected = [e for e in selected if e.expense_id is not None]

    selected.sort(key=lambda e: (e.entry_date, e.created_at or datetime.min, e.entry_id))
    rows = [
        JournalRow(
            entry=e,
            debit_account_name=names.get(e.debit_account),
            credit_account_name=names.get(e.credit_account),
        )
        for e in selected
    ]
    return JournalBook(start=start, end=end, rows=rows)


JOURNAL_CSV_HEADERS = ["Data", "Documento", "Histórico", "Conta Débito", "Conta Crédito", "Valor"]


def journal_to_csv(book: JournalBook) -> str:
    """Semicolon CSV with a UTF-8 BOM so spreadsheet apps pick the encoding."""
    out = io.StringIO()
    writer = csv.writer(out, delimiter=";", lineterminator="\n")
    writer.writerow(JOURNAL_CSV_HEADERS)
    for row in book.rows:
        e = row.entry
        writer.writerow(
            [
                format_br_date(e.entry_date),
                e.document or "-",
                e.history,
                f"{e.debit_account} - {row.debit_account_name or ''}".rstrip(" -"),
                f"{e.credit_account} - {row.credit_account_name or ''}".rstrip(" -"),
                f"{e.amount:.2f}",
            ]
        )
    return "\ufeff" + out.getvalue()
