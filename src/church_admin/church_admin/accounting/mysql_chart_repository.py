from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AccountNature, AccountType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Account
from .repository import ChartOfAccountsRepository


def _row_to_account(r: dict) -> Account:
    return Account(
        code=r["account_code"],
        name=r["account_name"],
        nature=AccountNature(r["nature"]),
        account_type=AccountType(r["account_type"]),
    )


class MySQLChartOfAccountsRepository(ChartOfAccountsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_code, account_name, nature, account_type
                FROM chart_of_accounts
                ORDER BY account_code
                """
            )
            return [_row_to_account(r) for r in fetchall(cur)]

    def get_by_code(self, code: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_code, account_name, nature, account_type
                FROM chart_of_accounts
                WHERE account_code=%s
                """,
                (code,),
            )
            r = fetchone(cur)
            return _row_to_account(r) if r else None
