from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Magazine:
    """Revista (quarterly curriculum magazine)."""

    magazine_id: int
    title: str
    lesson_count: Optional[int] = None


@dataclass(frozen=True)
class Lesson:
    lesson_id: int
    magazine_id: int
    number: int
    title: str


@dataclass(frozen=True)
class Classroom:
    """Turma."""

    class_id: int
    church_id: str
    name: str
    age_range: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class LessonPlan:
    """Planejamento: one magazine taught to one class on a fixed weekday."""

    plan_id: int
    church_id: str
    magazine_id: int
    class_id: Optional[int]
    start_date: date
    weekday: str
    end_date: date
    lesson_count: int


@dataclass(frozen=True)
class RosterSlot:
    """Escala: who teaches lesson N on which date (or no class that day)."""

    lesson_number: int
    lesson_date: date
    teacher_id: Optional[int]
    no_class: bool = False
    title: Optional[str] = None


@dataclass(frozen=True)
class LessonProgress:
    total: int
    completed: int
    percentage: int

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.completed)


@dataclass(frozen=True)
class RemainingLessons:
    church_id: str
    plan_id: int
    total: int
    completed: int
    remaining: int
    end_date: date


@dataclass(frozen=True)
class TeacherRota:
    teacher_id: int
    assigned: int
    taught: int
    percentage: int
