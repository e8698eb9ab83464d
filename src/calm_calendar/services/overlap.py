from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from ..domain import Event
from ..domain.models import format_time

OVERLAP_WARNING = "다음 일정과 겹칩니다"


def is_overlapping(first: Event, second: Event) -> bool:
    """Same stored date and intersecting half-open ``[start, end)`` intervals."""

    if first.date != second.date:
        return False
    return first.start_time < second.end_time and second.start_time < first.end_time


def find_overlapping(candidate: Event, events: Iterable[Event]) -> List[Event]:
    return [
        event
        for event in events
        if not (candidate.id is not None and event.id == candidate.id) and is_overlapping(candidate, event)
    ]


@dataclass
class OverlapGate:
    """Confirmation gate raised when a submitted event collides with others."""

    is_open: bool = False
    overlapping: List[Event] = field(default_factory=list)

    def check(self, candidate: Event, events: Iterable[Event]) -> bool:
        conflicts = find_overlapping(candidate, events)
        if not conflicts:
            return False
        self.overlapping = conflicts
        self.is_open = True
        return True

    def close(self) -> None:
        self.is_open = False
        self.overlapping = []

    def warning_message(self) -> str:
        lines = [f"{OVERLAP_WARNING}:"]
        for event in self.overlapping:
            lines.append(
                f"{event.title} ({event.date.isoformat()} "
                f"{format_time(event.start_time)}-{format_time(event.end_time)})"
            )
        return "\n".join(lines)
