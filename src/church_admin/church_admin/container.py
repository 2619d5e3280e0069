from __future__ import annotations

from dataclasses import dataclass

from .access.mysql_role_lookup_repository import MySQLRoleLookupRepository
from .access.service import ModuleService, RedirectService
from .accounting.mysql_chart_repository import MySQLChartOfAccountsRepository
from .accounting.mysql_journal_repository import MySQLJournalRepository
from .accounting.natures.factory import NatureRuleFactory
from .accounting.service import AccountingReportService
from .database.connection import DBConfig, DatabaseConnection
from .ebd.mysql_lesson_plan_repository import MySQLLessonPlanRepository
from .ebd.service import LessonPlanService
from .finance.mysql_bank_account_repository import MySQLBankAccountRepository
from .finance.mysql_financial_entry_repository import MySQLFinancialEntryRepository
from .finance.service import BankAccountService, LedgerService, TransferService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    auth_service: AuthService
    redirect_service: RedirectService
    module_service: ModuleService
    accounting_report_service: AccountingReportService
    ledger_service: LedgerService
    bank_account_service: BankAccountService
    transfer_service: TransferService
    lesson_plan_service: LessonPlanService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    lookups_repo = MySQLRoleLookupRepository(conn)
    chart_repo = MySQLChartOfAccountsRepository(conn)
    journal_repo = MySQLJournalRepository(conn)
    bank_accounts_repo = MySQLBankAccountRepository(conn)
    financial_entries_repo = MySQLFinancialEntryRepository(conn)
    lesson_plans_repo = MySQLLessonPlanRepository(conn)

    ledger_service = LedgerService(chart_repo, journal_repo)

    return Container(
        conn=conn,
        auth_service=AuthService(users_repo),
        redirect_service=RedirectService(lookups_repo),
        module_service=ModuleService(lookups_repo),
        accounting_report_service=AccountingReportService(chart_repo, journal_repo, factory=NatureRuleFactory()),
        ledger_service=ledger_service,
        bank_account_service=BankAccountService(bank_accounts_repo, ledger_service, financial_entries_repo),
        transfer_service=TransferService(ledger_service, journal_repo, bank_accounts_repo),
        lesson_plan_service=LessonPlanService(lesson_plans_repo),
    )
