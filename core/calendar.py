import calendar as _calendar
from datetime import date, datetime, timedelta
from typing import Sequence

from core.schemas import CalendarDay, Workout
from core.utils.dates import to_date_key

GRID_SIZE = 42


def calendar_days(reference: date | datetime) -> list[CalendarDay]:
    """Six Monday-first weeks covering the reference month.

    The grid opens with the tail of the previous month, lists every day of the
    month and is padded with the start of the next month up to 42 cells.
    """
    first = date(reference.year, reference.month, 1)
    days_in_month = _calendar.monthrange(first.year, first.month)[1]
    # date.weekday() is already Monday=0 .. Sunday=6
    leading = first.weekday()

    days = [
        CalendarDay(date=first - timedelta(days=offset), is_current_month=False) for offset in range(leading, 0, -1)
    ]
    days.extend(
        CalendarDay(date=first + timedelta(days=offset), is_current_month=True) for offset in range(days_in_month)
    )
    next_month = first + timedelta(days=days_in_month)
    days.extend(
        CalendarDay(date=next_month + timedelta(days=offset), is_current_month=False)
        for offset in range(GRID_SIZE - len(days))
    )
    return days


def shift_month(reference: date | datetime, delta: int) -> date:
    index = reference.year * 12 + reference.month - 1 + delta
    year, month = divmod(index, 12)
    month += 1
    day = min(reference.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)


def is_today(value: date | datetime, today: date | None = None) -> bool:
    current = today or date.today()
    return (value.year, value.month, value.day) == (current.year, current.month, current.day)


def workouts_on_date(value: date | datetime, workouts: Sequence[Workout]) -> list[Workout]:
    key = to_date_key(value)
    return [w for w in workouts if w.date == key]


def has_workout(value: date | datetime, workouts: Sequence[Workout]) -> bool:
    key = to_date_key(value)
    return any(w.date == key for w in workouts)
