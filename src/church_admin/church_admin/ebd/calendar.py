"""Lesson calendar: from a start date and a weekday to the dated lessons.

The first lesson falls on the first occurrence of the weekday on or after the
start date; each following lesson is seven days later.
"""
from __future__ import annotations

import unicodedata
from datetime import date, timedelta
from enum import IntEnum
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import DAYS_PER_WEEK, DEFAULT_LESSON_COUNT
from ..core.exceptions import ValidationError
from .model import RosterSlot


class Weekday(IntEnum):
    """Numbered like `date.weekday()` (Monday = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return _PT_LABELS[self]


_PT_LABELS = {
    Weekday.SUNDAY: "Domingo",
    Weekday.MONDAY: "Segunda-feira",
    Weekday.TUESDAY: "Terça-feira",
    Weekday.WEDNESDAY: "Quarta-feira",
    Weekday.THURSDAY: "Quinta-feira",
    Weekday.FRIDAY: "Sexta-feira",
    Weekday.SATURDAY: "Sábado",
}


def _fold(value: str) -> str:
    text = unicodedata.normalize("NFKD", value.strip().lower())
    return "".join(ch for ch in text if not unicodedata.combining(ch))


_ALIASES: dict[str, Weekday] = {}
for _day, _label in _PT_LABELS.items():
    _ALIASES[_fold(_label)] = _day
    _ALIASES[_fold(_label.split("-")[0])] = _day
    _ALIASES[_day.name.lower()] = _day


def parse_weekday(value) -> Weekday:
    """Accept a Weekday, its number, or a Portuguese/English day name."""
    if isinstance(value, Weekday):
        return value
    if isinstance(value, int):
        try:
            return Weekday(value)
        except ValueError:
            raise ValidationError("Dia da semana inválido")
    day = _ALIASES.get(_fold(str(value or "")))
    if day is None:
        raise ValidationError("Dia da semana inválido")
    return day


def first_lesson_date(start: date, weekday) -> date:
    day = parse_weekday(weekday)
    return start + timedelta(days=(day - start.weekday()) % DAYS_PER_WEEK)


def lesson_dates(start: date, weekday, count: int = DEFAULT_LESSON_COUNT) -> list[date]:
    if start is None:
        raise ValidationError("Data de início é obrigatória")
    if int(count) < 1:
        raise ValidationError("A revista precisa ter ao menos uma lição")
    first = first_lesson_date(start, weekday)
    return [first + timedelta(days=DAYS_PER_WEEK * i) for i in range(int(count))]


def termination_date(start: date, weekday, count: int = DEFAULT_LESSON_COUNT) -> date:
    return lesson_dates(start, weekday, count)[-1]


def build_roster(
    dates: Sequence[date],
    assignments: Mapping[int, Optional[int]],
    *,
    no_class: Iterable[int] = (),
    titles: Optional[Mapping[int, str]] = None,
) -> list[RosterSlot]:
    """One slot per lesson (numbered from 1).

    Every lesson not flagged "no class" needs a teacher.
    """
    skipped = {int(n) for n in no_class}
    titles = titles or {}

    slots: list[RosterSlot] = []
    missing: list[int] = []
    for number, lesson_date in enumerate(dates, start=1):
        is_off = number in skipped
        teacher_id = assignments.get(number)
        if not is_off and not teacher_id:
            missing.append(number)
        slots.append(
            RosterSlot(
                lesson_number=number,
                lesson_date=lesson_date,
                teacher_id=None if is_off else teacher_id,
                no_class=is_off,
                title=titles.get(number) or f"Lição {number}",
            )
        )

    if missing:
        raise ValidationError(
            "Selecione um professor para todas as lições ou marque como 'Sem aula' "
            f"(faltando: {', '.join(str(n) for n in missing)})"
        )
    return slots
