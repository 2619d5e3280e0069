from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.logging_utils import get_logger
from ..common.validators import require_period
from ..core.enums import JournalKind
from ..core.exceptions import ValidationError
from .model import BalanceSheet, IncomeStatement, JournalBook, TrialBalance
from .natures.factory import NatureRuleFactory
from .repository import ChartOfAccountsRepository, JournalRepository
from .statements import (
    build_journal_book,
    compute_balance_sheet,
    compute_income_statement,
    compute_trial_balance,
    journal_to_csv,
)

logger = get_logger(__name__)


class AccountingReportService:
    """Use case: accounting reports for one church (balancete, balanço, DRE, diário)."""

    def __init__(
        self,
        chart: ChartOfAccountsRepository,
        journal: JournalRepository,
        *,
        factory: Optional[NatureRuleFactory] = None,
    ):
        self._chart = chart
        self._journal = journal
        self._factory = factory or NatureRuleFactory()

    @staticmethod
    def _require_church(church_id: Optional[str]) -> str:
        if not church_id:
            raise ValidationError("Igreja não identificada")
        return str(church_id)

    def trial_balance(self, *, church_id: str, start: Optional[date], end: Optional[date]) -> TrialBalance:
        church_id = self._require_church(church_id)
        start, end = require_period(start, end)

        accounts = self._chart.list_all()
        prior = self._journal.list_before(church_id=church_id, before=start)
        period = self._journal.list_between(church_id=church_id, start=start, end=end)

        report = compute_trial_balance(accounts, prior, period, start=start, end=end, factory=self._factory)
        if not report.is_consistent:
            logger.warning(
                "trial balance inconsistent church=%s period=%s..%s difference=%s",
                church_id, start, end, report.difference,
            )
        return report

    def balance_sheet(self, *, church_id: str, as_of: Optional[date]) -> BalanceSheet:
        church_id = self._require_church(church_id)
        if not as_of:
            raise ValidationError("Por favor, selecione a data para gerar o balanço")

        accounts = self._chart.list_all()
        entries = self._journal.list_until(church_id=church_id, as_of=as_of)
        report = compute_balance_sheet(accounts, entries, as_of=as_of, factory=self._factory)
        if not report.is_consistent:
            logger.warning("balance sheet unbalanced church=%s as_of=%s difference=%s", church_id, as_of, report.difference)
        return report

    def income_statement(self, *, church_id: str, start: Optional[date], end: Optional[date]) -> IncomeStatement:
        church_id = self._require_church(church_id)
        start, end = require_period(start, end)

        accounts = self._chart.list_all()
        entries = self._journal.list_between(church_id=church_id, start=start, end=end)
        return compute_income_statement(accounts, entries, start=start, end=end, factory=self._factory)

    def journal(
        self,
        *,
        church_id: str,
        start: Optional[date],
        end: Optional[date],
        account_code: Optional[str] = None,
        kind: JournalKind = JournalKind.ALL,
    ) -> JournalBook:
        church_id = self._require_church(church_id)
        start, end = require_period(start, end)

        accounts = self._chart.list_all()
        entries = self._journal.list_between(church_id=church_id, start=start, end=end)
        return build_journal_book(
            accounts,
            entries,
            start=start,
            end=end,
            account_code=account_code or None,
            kind=kind,
        )

    def journal_csv(self, **kwargs) -> str:
        return journal_to_csv(self.journal(**kwargs))
