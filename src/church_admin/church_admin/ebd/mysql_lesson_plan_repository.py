from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_date
from .model import Classroom, Lesson, LessonPlan, Magazine, RosterSlot
from .repository import LessonPlanRepository

_PLAN_COLUMNS = """
    plan_id, church_id, magazine_id, class_id, start_date, weekday, end_date, lesson_count
"""


def _row_to_plan(r: dict) -> LessonPlan:
    return LessonPlan(
        plan_id=int(r["plan_id"]),
        church_id=str(r["church_id"]),
        magazine_id=int(r["magazine_id"]),
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        start_date=to_date(r["start_date"]),
        weekday=r["weekday"],
        end_date=to_date(r["end_date"]),
        lesson_count=int(r["lesson_count"]),
    )


class MySQLLessonPlanRepository(LessonPlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_magazine(self, magazine_id: int) -> Optional[Magazine]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT magazine_id, title, lesson_count FROM ebd_magazines WHERE magazine_id=%s",
                (int(magazine_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            count = r.get("lesson_count")
            return Magazine(
                magazine_id=int(r["magazine_id"]),
                title=r["title"],
                lesson_count=int(count) if count is not None else None,
            )

    def list_lessons(self, magazine_id: int) -> Sequence[Lesson]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lesson_id, magazine_id, lesson_number, title
                FROM ebd_lessons
                WHERE magazine_id=%s
                ORDER BY lesson_number ASC
                """,
                (int(magazine_id),),
            )
            return [
                Lesson(
                    lesson_id=int(r["lesson_id"]),
                    magazine_id=int(r["magazine_id"]),
                    number=int(r["lesson_number"]),
                    title=r["title"],
                )
                for r in fetchall(cur)
            ]

    def get_classroom(self, *, church_id: str, class_id: int) -> Optional[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, church_id, name, age_range, is_active
                FROM ebd_classes
                WHERE church_id=%s AND class_id=%s
                """,
                (church_id, int(class_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Classroom(
                class_id=int(r["class_id"]),
                church_id=str(r["church_id"]),
                name=r["name"],
                age_range=r.get("age_range"),
                is_active=bool(r.get("is_active", 1)),
            )

    def active_teacher_ids(self, *, church_id: str) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT teacher_id FROM ebd_teachers WHERE church_id=%s AND is_active=1",
                (church_id,),
            )
            return {int(r["teacher_id"]) for r in fetchall(cur)}

    def create_plan_with_roster(
        self,
        *,
        church_id: str,
        magazine_id: int,
        class_id: Optional[int],
        start_date: date,
        weekday: str,
        end_date: date,
        lesson_count: int,
        roster: Sequence[RosterSlot],
    ) -> int:
        # One transaction: a plan without its roster is never visible.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ebd_lesson_plans(
                    church_id, magazine_id, class_id, start_date, weekday, end_date, lesson_count
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (church_id, int(magazine_id), class_id, start_date, weekday, end_date, int(lesson_count)),
            )
            plan_id = int(cur.lastrowid)
            if roster:
                cur.executemany(
                    """
                    INSERT INTO ebd_roster(
                        plan_id, church_id, class_id, teacher_id, lesson_number, lesson_date,
                        title, no_class
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            plan_id,
                            church_id,
                            class_id,
                            slot.teacher_id,
                            slot.lesson_number,
                            slot.lesson_date,
                            slot.title,
                            1 if slot.no_class else 0,
                        )
                        for slot in roster
                    ],
                )
            return plan_id

    def get_plan(self, *, church_id: str, plan_id: int) -> Optional[LessonPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PLAN_COLUMNS} FROM ebd_lesson_plans WHERE church_id=%s AND plan_id=%s",
                (church_id, int(plan_id)),
            )
            r = fetchone(cur)
            return _row_to_plan(r) if r else None

    def list_roster(self, plan_id: int) -> Sequence[RosterSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lesson_number, lesson_date, teacher_id, no_class, title
                FROM ebd_roster
                WHERE plan_id=%s
                ORDER BY lesson_number ASC
                """,
                (int(plan_id),),
            )
            return [
                RosterSlot(
                    lesson_number=int(r["lesson_number"]),
                    lesson_date=to_date(r["lesson_date"]),
                    teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
                    no_class=bool(r.get("no_class")),
                    title=r.get("title"),
                )
                for r in fetchall(cur)
            ]

    def list_plans_for_churches(self, church_ids: Sequence[str]) -> Sequence[LessonPlan]:
        if not church_ids:
            return []
        placeholders = ",".join(["%s"] * len(church_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PLAN_COLUMNS}
                FROM ebd_lesson_plans
                WHERE church_id IN ({placeholders})
                ORDER BY church_id ASC, start_date ASC, plan_id ASC
                """,
                tuple(church_ids),
            )
            return [_row_to_plan(r) for r in fetchall(cur)]
