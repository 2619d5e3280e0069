from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.church_admin.church_admin.core.exceptions import ValidationError
from src.church_admin.church_admin.ebd.calendar import (
    Weekday,
    build_roster,
    first_lesson_date,
    lesson_dates,
    parse_weekday,
    termination_date,
)


def test_sunday_calendar_from_a_wednesday_start():
    # 2025-01-01 is a Wednesday
    dates = lesson_dates(date(2025, 1, 1), "Domingo")

    assert len(dates) == 13
    assert dates[0] == date(2025, 1, 5)
    assert dates[-1] == date(2025, 3, 30)
    assert all(d.weekday() == 6 for d in dates)
    assert all(b - a == timedelta(days=7) for a, b in zip(dates, dates[1:]))


def test_start_on_the_weekday_is_the_first_lesson():
    assert first_lesson_date(date(2025, 1, 5), Weekday.SUNDAY) == date(2025, 1, 5)
    assert termination_date(date(2025, 1, 5), Weekday.SUNDAY, 1) == date(2025, 1, 5)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Domingo", Weekday.SUNDAY),
        ("sábado", Weekday.SATURDAY),
        ("Sabado", Weekday.SATURDAY),
        ("Terça-feira", Weekday.TUESDAY),
        ("terca", Weekday.TUESDAY),
        ("wednesday", Weekday.WEDNESDAY),
        (3, Weekday.THURSDAY),
    ],
)
def test_parse_weekday_aliases(value, expected):
    assert parse_weekday(value) == expected


def test_invalid_weekday_and_count():
    with pytest.raises(ValidationError):
        parse_weekday("feriado")
    with pytest.raises(ValidationError):
        lesson_dates(date(2025, 1, 1), "Domingo", 0)


def test_roster_requires_a_teacher_unless_no_class():
    dates = lesson_dates(date(2025, 1, 1), "Domingo", 3)

    roster = build_roster(dates, {1: 10, 3: 11}, no_class=[2])

    assert [s.teacher_id for s in roster] == [10, None, 11]
    assert roster[1].no_class
    assert roster[0].title == "Lição 1"

    with pytest.raises(ValidationError) as exc:
        build_roster(dates, {1: 10})
    assert "2, 3" in str(exc.value)
