from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_date, to_decimal
from .model import JournalEntry
from .repository import JournalRepository

_COLUMNS = """
    entry_id, church_id, entry_date, debit_account, credit_account, amount,
    history, document, financial_entry_id, expense_id, created_at
"""


def _row_to_entry(r: dict) -> JournalEntry:
    return JournalEntry(
        entry_id=int(r["entry_id"]),
        church_id=str(r["church_id"]),
        entry_date=to_date(r["entry_date"]),
        debit_account=r["debit_account"],
        credit_account=r["credit_account"],
        amount=to_decimal(r["amount"]),
        history=r.get("history") or "",
        document=r.get("document"),
        financial_entry_id=r.get("financial_entry_id"),
        expense_id=r.get("expense_id"),
        created_at=r.get("created_at"),
    )


class MySQLJournalRepository(JournalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, order: str = "entry_date ASC, created_at ASC", limit: Optional[int] = None):
        sql = f"SELECT {_COLUMNS} FROM journal_entries WHERE {where} ORDER BY {order}"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_between(self, *, church_id: str, start: date, end: date) -> Sequence[JournalEntry]:
        return self._select("church_id=%s AND entry_date BETWEEN %s AND %s", (church_id, start, end))

    def list_before(self, *, church_id: str, before: date) -> Sequence[JournalEntry]:
        return self._select("church_id=%s AND entry_date < %s", (church_id, before))

    def list_until(self, *, church_id: str, as_of: date) -> Sequence[JournalEntry]:
        return self._select("church_id=%s AND entry_date <= %s", (church_id, as_of))

    def list_by_history_prefix(self, *, church_id: str, prefix: str, limit: int) -> Sequence[JournalEntry]:
        return self._select(
            "church_id=%s AND history LIKE %s",
            (church_id, prefix + "%"),
            order="entry_date DESC, created_at DESC",
            limit=limit,
        )

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO journal_entries(
                    church_id, entry_date, debit_account, credit_account, amount,
                    history, document, financial_entry_id, expense_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    church_id,
                    entry_date,
                    debit_account,
                    credit_account,
                    amount,
                    history,
                    document,
                    financial_entry_id,
                    expense_id,
                ),
            )
            return int(cur.lastrowid)
