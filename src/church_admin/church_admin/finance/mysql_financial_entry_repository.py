from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import FinancialEntryRepository


class MySQLFinancialEntryRepository(FinancialEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        church_id: str,
        entry_date: date,
        kind: str,
        description: str,
        amount: Decimal,
        payment_account: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO financial_entries(church_id, entry_date, kind, description, amount, payment_account)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (church_id, entry_date, kind, description, amount, payment_account),
            )
            return int(cur.lastrowid)
