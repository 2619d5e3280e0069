from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Classroom, Lesson, LessonPlan, Magazine, RosterSlot


class LessonPlanRepository(Protocol):
    def get_magazine(self, magazine_id: int) -> Optional[Magazine]:
        raise NotImplementedError

    def list_lessons(self, magazine_id: int) -> Sequence[Lesson]:
        raise NotImplementedError

    def get_classroom(self, *, church_id: str, class_id: int) -> Optional[Classroom]:
        raise NotImplementedError

    def active_teacher_ids(self, *, church_id: str) -> set[int]:
        raise NotImplementedError

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
        """Persist the plan and its roster atomically; return the plan id."""
        raise NotImplementedError

    def get_plan(self, *, church_id: str, plan_id: int) -> Optional[LessonPlan]:
        raise NotImplementedError

    def list_roster(self, plan_id: int) -> Sequence[RosterSlot]:
        raise NotImplementedError

    def list_plans_for_churches(self, church_ids: Sequence[str]) -> Sequence[LessonPlan]:
        raise NotImplementedError
