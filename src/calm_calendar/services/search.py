from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from ..domain import CalendarView, Event
from ..utils.dates import is_within_range, view_range


def matches_search(event: Event, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return any(needle in field.lower() for field in (event.title, event.description, event.location))


def filter_events(
    events: Iterable[Event],
    search_term: str,
    current_date: date,
    view: Optional[CalendarView],
) -> List[Event]:
    """Events matching ``search_term`` inside the visible window, in input order."""

    matched = [event for event in events if matches_search(event, search_term)]
    if view is None:
        return matched
    start, end = view_range(current_date, view)
    return [event for event in matched if is_within_range(event.date, start, end)]
