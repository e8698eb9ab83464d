"""Calendar grid arithmetic.

Weeks run Sunday through Saturday everywhere in this module. None of the
helpers read the clock; callers pass the reference date explicitly.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..domain import CalendarView, Event

WeekRow = List[Optional[int]]


def pad_zero(value: Union[int, float], size: int = 2) -> str:
    """Left pad ``value`` with zeros up to ``size`` characters.

    >>> pad_zero(5)
    '05'
    >>> pad_zero(3.14, 5)
    '03.14'
    """

    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).rjust(size, "0")


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``.

    Months outside 1..12 roll into the neighbouring year, so month 0 is the
    previous December and month 13 the next January.
    """

    rolled_year, month_index = divmod(year * 12 + (month - 1), 12)
    return monthrange(rolled_year, month_index + 1)[1]


def _week_start(day: date) -> date:
    # date.weekday() is Monday=0; shift so Sunday opens the week.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_dates(day: date) -> List[date]:
    start = _week_start(day)
    return [start + timedelta(days=offset) for offset in range(7)]


def weeks_in_month(day: date) -> List[WeekRow]:
    first = day.replace(day=1)
    total_days = days_in_month(day.year, day.month)
    leading = (first.weekday() + 1) % 7

    slots: List[Optional[int]] = [None] * leading
    slots.extend(range(1, total_days + 1))
    if len(slots) % 7:
        slots.extend([None] * (7 - len(slots) % 7))
    return [slots[index : index + 7] for index in range(0, len(slots), 7)]


def month_range(day: date) -> Tuple[date, date]:
    first = day.replace(day=1)
    last = day.replace(day=days_in_month(day.year, day.month))
    return first, last


def events_on_day(events: Iterable[Event], day_of_month: int) -> List[Event]:
    if not 1 <= day_of_month <= 31:
        return []
    return [event for event in events if event.date.day == day_of_month]


def format_week_label(day: date) -> str:
    """Label the week containing ``day`` as ``"<year>년 <month>월 <n>주"``.

    A week belongs to the month holding its Thursday, and ``n`` counts the
    Thursdays of that month up to and including this one.
    """

    thursday = _week_start(day) + timedelta(days=4)
    ordinal = (thursday.day - 1) // 7 + 1
    return f"{thursday.year}년 {thursday.month}월 {ordinal}주"


def format_month_label(day: date) -> str:
    return f"{day.year}년 {day.month}월"


def is_within_range(day: date, start: date, end: date) -> bool:
    if start > end:
        return False
    return start <= day <= end


def format_date(day: date, day_of_month: Optional[int] = None) -> str:
    resolved_day = day.day if day_of_month is None else day_of_month
    return f"{day.year}-{pad_zero(day.month)}-{pad_zero(resolved_day)}"


def shift_view(day: date, view: Optional[CalendarView], step: int) -> date:
    """Move ``day`` by ``step`` weeks in week view, otherwise by ``step`` months."""

    if view is CalendarView.WEEK:
        return day + timedelta(days=7 * step)
    year, month_index = divmod(day.year * 12 + (day.month - 1) + step, 12)
    month = month_index + 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def view_range(day: date, view: CalendarView) -> Tuple[date, date]:
    if view is CalendarView.WEEK:
        dates: Sequence[date] = week_dates(day)
        return dates[0], dates[-1]
    return month_range(day)
