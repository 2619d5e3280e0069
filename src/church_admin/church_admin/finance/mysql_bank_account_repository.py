from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date, to_decimal
from .model import BankAccount
from .repository import BankAccountRepository


def _row_to_account(r: dict) -> BankAccount:
    return BankAccount(
        account_id=int(r["account_id"]),
        church_id=str(r["church_id"]),
        bank_name=r["bank_name"],
        agency=r.get("agency") or "",
        account_number=r.get("account_number") or "",
        account_type=r.get("account_type") or "",
        initial_balance=to_decimal(r.get("initial_balance")),
        initial_balance_date=to_date(r.get("initial_balance_date")),
    )


class MySQLBankAccountRepository(BankAccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO bank_accounts(
                    church_id, bank_name, agency, account_number, account_type,
                    initial_balance, initial_balance_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (church_id, bank_name, agency, account_number, account_type, initial_balance, initial_balance_date),
            )
            return int(cur.lastrowid)

    def get_by_id(self, *, church_id: str, account_id: int) -> Optional[BankAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_id, church_id, bank_name, agency, account_number, account_type,
                       initial_balance, initial_balance_date
                FROM bank_accounts
                WHERE church_id=%s AND account_id=%s
                """,
                (church_id, int(account_id)),
            )
            r = fetchone(cur)
            return _row_to_account(r) if r else None

    def list_for_church(self, *, church_id: str) -> Sequence[BankAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_id, church_id, bank_name, agency, account_number, account_type,
                       initial_balance, initial_balance_date
                FROM bank_accounts
                WHERE church_id=%s
                ORDER BY bank_name ASC, account_id ASC
                """,
                (church_id,),
            )
            return [_row_to_account(r) for r in fetchall(cur)]
