from __future__ import annotations

from datetime import date

import pytest

from src.church_admin.church_admin.core.exceptions import NotFoundError, ValidationError
from src.church_admin.church_admin.ebd.model import Classroom, Lesson, LessonPlan, Magazine
from src.church_admin.church_admin.ebd.service import LessonPlanService


class InMemoryLessonPlans:
    def __init__(self):
        self.magazines = {
            1: Magazine(1, "Revista Adultos", lesson_count=None),
            2: Magazine(2, "Revista Jovens", lesson_count=4),
            3: Magazine(3, "Revista Sem Lições"),
        }
        self.lessons = {1: [Lesson(100 + n, 1, n, f"Tema {n}") for n in range(1, 14)]}
        self.classes = {("c1", 7): Classroom(7, "c1", "Adultos")}
        self.teachers = {"c1": {10, 11}}
        self.plans: dict[int, LessonPlan] = {}
        self.rosters: dict[int, list] = {}

    def get_magazine(self, magazine_id):
        return self.magazines.get(magazine_id)

    def list_lessons(self, magazine_id):
        return self.lessons.get(magazine_id, [])

    def get_classroom(self, *, church_id, class_id):
        return self.classes.get((church_id, class_id))

    def active_teacher_ids(self, *, church_id):
        return set(self.teachers.get(church_id, set()))

    def create_plan_with_roster(self, *, roster, **fields):
        plan_id = len(self.plans) + 1
        self.plans[plan_id] = LessonPlan(plan_id=plan_id, **fields)
        self.rosters[plan_id] = list(roster)
        return plan_id

    def get_plan(self, *, church_id, plan_id):
        plan = self.plans.get(plan_id)
        return plan if plan and plan.church_id == church_id else None

    def list_roster(self, plan_id):
        return self.rosters.get(plan_id, [])

    def list_plans_for_churches(self, church_ids):
        return [p for p in self.plans.values() if p.church_id in church_ids]


def _create(service, **overrides):
    params = dict(
        church_id="c1",
        magazine_id=1,
        class_id=7,
        start=date(2025, 1, 1),
        weekday="Domingo",
        assignments={n: 10 for n in range(1, 14)},
    )
    params.update(overrides)
    return service.create_plan(**params)


def test_create_plan_stores_plan_and_roster_together():
    repo = InMemoryLessonPlans()
    service = LessonPlanService(repo)

    plan_id = _create(service)

    plan = repo.plans[plan_id]
    assert plan.lesson_count == 13
    assert plan.end_date == date(2025, 3, 30)
    assert plan.weekday == "Domingo"
    roster = repo.rosters[plan_id]
    assert len(roster) == 13
    assert roster[0].title == "Tema 1"


def test_lesson_count_falls_back_to_magazine_then_default():
    repo = InMemoryLessonPlans()
    service = LessonPlanService(repo)

    assert len(service.preview(magazine_id=2, start=date(2025, 1, 1), weekday="Domingo")) == 4
    assert len(service.preview(magazine_id=3, start=date(2025, 1, 1), weekday="Domingo")) == 13


def test_create_plan_validations():
    service = LessonPlanService(InMemoryLessonPlans())

    with pytest.raises(NotFoundError):
        _create(service, magazine_id=99)
    with pytest.raises(NotFoundError):
        _create(service, class_id=8)
    with pytest.raises(ValidationError):
        _create(service, assignments={1: 10})
    with pytest.raises(ValidationError) as exc:
        _create(service, assignments={n: 55 for n in range(1, 14)})
    assert "55" in str(exc.value)


def test_no_class_days_do_not_need_a_teacher():
    repo = InMemoryLessonPlans()
    service = LessonPlanService(repo)

    plan_id = _create(service, assignments={n: 11 for n in range(2, 14)}, no_class=[1])

    assert repo.rosters[plan_id][0].no_class
    assert repo.rosters[plan_id][0].teacher_id is None


def test_progress_and_rota():
    repo = InMemoryLessonPlans()
    service = LessonPlanService(repo)
    plan_id = _create(service)

    progress, rota = service.progress(church_id="c1", plan_id=plan_id, today=date(2025, 2, 2))

    assert progress.percentage == 38
    assert rota[0].teacher_id == 10
    assert rota[0].taught == 5

    with pytest.raises(NotFoundError):
        service.progress(church_id="c2", plan_id=plan_id, today=date(2025, 2, 2))


def test_remaining_for_churches_uses_the_plan_closest_to_its_end():
    repo = InMemoryLessonPlans()
    repo.classes[("c2", 8)] = Classroom(8, "c2", "Jovens")
    repo.teachers["c2"] = {20}
    service = LessonPlanService(repo)

    _create(service, start=date(2025, 1, 1))
    _create(service, start=date(2025, 2, 1))
    _create(service, church_id="c2", class_id=8, start=date(2024, 1, 1), assignments={n: 20 for n in range(1, 14)})

    groups = service.remaining_for_churches(church_ids=["c1", "c2"], today=date(2025, 2, 9))

    # c2's only plan already ended
    assert groups["high"] == []
    assert groups["low"] == []
    [item] = groups["medium"]
    assert item.church_id == "c1"
    assert item.plan_id == 1
    assert item.remaining == 13 - 5
