from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

START_TIME_ERROR = "시작 시간은 종료 시간보다 빨라야 합니다."
END_TIME_ERROR = "종료 시간은 시작 시간보다 늦어야 합니다."

TimeInput = Union[str, time, None]


@dataclass(frozen=True, slots=True)
class TimeErrors:
    start_time_error: Optional[str] = None
    end_time_error: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.start_time_error or self.end_time_error)


def _as_time(value: TimeInput) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


def time_error_messages(start: TimeInput, end: TimeInput) -> TimeErrors:
    """Compare start and end times; empty input skips the comparison."""

    start_value = _as_time(start)
    end_value = _as_time(end)
    if start_value is None or end_value is None:
        return TimeErrors()
    if start_value >= end_value:
        return TimeErrors(start_time_error=START_TIME_ERROR, end_time_error=END_TIME_ERROR)
    return TimeErrors()
