from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .repository import RoleLookupRepository


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class MySQLRoleLookupRepository(RoleLookupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _exists(self, sql: str, params: tuple) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetchone(cur) is not None

    def is_salesperson(self, email: str) -> bool:
        if not email:
            return False
        return self._exists(
            "SELECT id FROM salespeople WHERE LOWER(TRIM(email))=%s LIMIT 1",
            (_normalize_email(email),),
        )

    def client_type(self, user_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT client_type FROM ebd_clients WHERE superintendent_user_id=%s LIMIT 1",
                (int(user_id),),
            )
            r = fetchone(cur)
            return r.get("client_type") if r else None

    def is_superintendent(self, user_id: int) -> bool:
        return self._exists(
            "SELECT id FROM ebd_clients WHERE superintendent_user_id=%s AND is_activated=1 LIMIT 1",
            (int(user_id),),
        )

    def is_promoted_superintendent(self, user_id: int) -> bool:
        return self._exists(
            "SELECT id FROM ebd_user_roles WHERE user_id=%s AND role='superintendente' LIMIT 1",
            (int(user_id),),
        )

    def is_reactivation_lead(self, email: str) -> bool:
        if not email:
            return False
        return self._exists(
            "SELECT id FROM ebd_reactivation_leads WHERE LOWER(TRIM(email))=%s LIMIT 1",
            (_normalize_email(email),),
        )

    def is_teacher(self, user_id: int) -> bool:
        return self._exists(
            "SELECT teacher_id FROM ebd_teachers WHERE user_id=%s AND is_active=1 LIMIT 1",
            (int(user_id),),
        )

    def is_student(self, user_id: int) -> bool:
        return self._exists(
            "SELECT student_id FROM ebd_students WHERE user_id=%s AND is_active=1 LIMIT 1",
            (int(user_id),),
        )

    def church_for_user(self, user_id: int) -> Optional[str]:
        queries = (
            "SELECT church_id FROM churches WHERE owner_user_id=%s LIMIT 1",
            "SELECT church_id FROM ebd_students WHERE user_id=%s AND is_active=1 LIMIT 1",
            "SELECT church_id FROM ebd_teachers WHERE user_id=%s AND is_active=1 LIMIT 1",
        )
        with db_cursor(self._conn_factory) as (_, cur):
            for sql in queries:
                cur.execute(sql, (int(user_id),))
                r = fetchone(cur)
                if r and r.get("church_id"):
                    return str(r["church_id"])
        return None

    def active_modules(self, church_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT m.module_name
                FROM subscriptions s
                JOIN modules m ON m.module_id = s.module_id
                WHERE s.church_id=%s AND s.status='Ativo'
                ORDER BY m.module_name ASC
                """,
                (church_id,),
            )
            return [r["module_name"] for r in fetchall(cur)]
