from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.logging_utils import get_logger
from ..core.constants import DEFAULT_LESSON_COUNT
from ..core.exceptions import NotFoundError, ValidationError
from .calendar import build_roster, lesson_dates, parse_weekday
from .model import LessonProgress, RemainingLessons, RosterSlot, TeacherRota
from .progress import bucket_remaining, remaining_lessons, rota_completion, teaching_progress
from .repository import LessonPlanRepository

logger = get_logger(__name__)


class LessonPlanService:
    """Use case: schedule a magazine for a class and follow its progress."""

    def __init__(self, repo: LessonPlanRepository):
        self._repo = repo

    def _lesson_count_and_titles(self, magazine_id: int) -> tuple[int, dict[int, str]]:
        magazine = self._repo.get_magazine(magazine_id)
        if not magazine:
            raise NotFoundError("Revista não encontrada")
        lessons = self._repo.list_lessons(magazine_id)
        if lessons:
            return len(lessons), {l.number: l.title for l in lessons}
        return magazine.lesson_count or DEFAULT_LESSON_COUNT, {}

    def preview(self, *, magazine_id: int, start: Optional[date], weekday) -> list[RosterSlot]:
        """Dated lessons of a magazine, without teachers, for the planning screen."""
        if not start:
            raise ValidationError("Data de início é obrigatória")
        count, titles = self._lesson_count_and_titles(magazine_id)
        dates = lesson_dates(start, weekday, count)
        return [
            RosterSlot(
                lesson_number=n,
                lesson_date=d,
                teacher_id=None,
                title=titles.get(n) or f"Lição {n}",
            )
            for n, d in enumerate(dates, start=1)
        ]

    def create_plan(
        self,
        *,
        church_id: str,
        magazine_id: int,
        class_id: Optional[int],
        start: Optional[date],
        weekday,
        assignments: Mapping[int, Optional[int]],
        no_class: Iterable[int] = (),
    ) -> int:
        if not church_id:
            raise ValidationError("Igreja não identificada")
        if not start:
            raise ValidationError("Data de início é obrigatória")
        day = parse_weekday(weekday)

        if class_id is not None:
            classroom = self._repo.get_classroom(church_id=church_id, class_id=class_id)
            if not classroom or not classroom.is_active:
                raise NotFoundError("Turma não encontrada")

        count, titles = self._lesson_count_and_titles(magazine_id)
        dates = lesson_dates(start, day, count)
        roster = build_roster(dates, assignments, no_class=no_class, titles=titles)

        assigned = {s.teacher_id for s in roster if s.teacher_id}
        unknown = assigned - self._repo.active_teacher_ids(church_id=church_id)
        if unknown:
            raise ValidationError(
                f"Professor(es) não encontrado(s) ou inativo(s): {', '.join(str(t) for t in sorted(unknown))}"
            )

        plan_id = self._repo.create_plan_with_roster(
            church_id=church_id,
            magazine_id=magazine_id,
            class_id=class_id,
            start_date=start,
            weekday=day.label,
            end_date=dates[-1],
            lesson_count=count,
            roster=roster,
        )
        logger.info("lesson plan created church=%s plan=%s lessons=%s", church_id, plan_id, count)
        return plan_id

    def progress(self, *, church_id: str, plan_id: int, today: date) -> tuple[LessonProgress, list[TeacherRota]]:
        plan = self._repo.get_plan(church_id=church_id, plan_id=plan_id)
        if not plan:
            raise NotFoundError("Planejamento não encontrado")
        roster = self._repo.list_roster(plan.plan_id)
        if roster:
            dates = [s.lesson_date for s in roster]
        else:
            dates = lesson_dates(plan.start_date, plan.weekday, plan.lesson_count)
        return teaching_progress(dates, today), rota_completion(roster, today)

    def remaining_for_churches(
        self, *, church_ids: Sequence[str], today: date
    ) -> dict[str, list[RemainingLessons]]:
        """Per church, the active plan closest to its end, grouped by remaining lessons."""
        closest: dict[str, RemainingLessons] = {}
        for plan in self._repo.list_plans_for_churches(list(church_ids)):
            if plan.end_date < today:
                continue
            item = remaining_lessons(
                church_id=plan.church_id,
                plan_id=plan.plan_id,
                start=plan.start_date,
                end=plan.end_date,
                total=plan.lesson_count,
                today=today,
            )
            current = closest.get(plan.church_id)
            if current is None or item.remaining < current.remaining:
                closest[plan.church_id] = item
        return bucket_remaining(closest.values())
