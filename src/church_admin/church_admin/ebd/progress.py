"""Teaching progress over a lesson calendar."""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..core.constants import DAYS_PER_WEEK
from .model import LessonProgress, RemainingLessons, RosterSlot, TeacherRota

# Remaining-lesson buckets shown to salespeople (inclusive ranges).
REMAINING_BUCKETS = (
    ("high", 9, 13),
    ("medium", 5, 8),
    ("low", 0, 4),
)


def percent(part: int, whole: int) -> int:
    """Half-up rounded percentage, capped at 100 (0 when whole is 0)."""
    if whole <= 0:
        return 0
    value = (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return min(int(value), 100)


def teaching_progress(dates: Sequence[date], today: date) -> LessonProgress:
    total = len(dates)
    completed = sum(1 for d in dates if d <= today)
    return LessonProgress(total=total, completed=completed, percentage=percent(completed, total))


def elapsed_lessons(start: date, total: int, today: date) -> int:
    """Whole weeks since `start`, capped at `total` (0 before the start)."""
    if today < start:
        return 0
    return min((today - start).days // DAYS_PER_WEEK, total)


def remaining_lessons(
    *,
    church_id: str,
    plan_id: int,
    start: date,
    end: date,
    total: int,
    today: date,
) -> RemainingLessons:
    completed = elapsed_lessons(start, total, today)
    return RemainingLessons(
        church_id=church_id,
        plan_id=plan_id,
        total=total,
        completed=completed,
        remaining=max(0, total - completed),
        end_date=end,
    )


def bucket_remaining(items: Iterable[RemainingLessons]) -> dict[str, list[RemainingLessons]]:
    groups: dict[str, list[RemainingLessons]] = {name: [] for name, _, _ in REMAINING_BUCKETS}
    for item in items:
        for name, low, high in REMAINING_BUCKETS:
            if low <= item.remaining <= high:
                groups[name].append(item)
                break
    return groups


def rota_completion(roster: Iterable[RosterSlot], today: date) -> list[TeacherRota]:
    """Per teacher: lessons assigned vs. already taught ("no class" slots ignored)."""
    assigned: dict[int, int] = defaultdict(int)
    taught: dict[int, int] = defaultdict(int)
    for slot in roster:
        if slot.no_class or not slot.teacher_id:
            continue
        assigned[slot.teacher_id] += 1
        if slot.lesson_date <= today:
            taught[slot.teacher_id] += 1

    return [
        TeacherRota(
            teacher_id=teacher_id,
            assigned=count,
            taught=taught[teacher_id],
            percentage=percent(taught[teacher_id], count),
        )
        for teacher_id, count in sorted(assigned.items())
    ]
