"""Pure date and time helpers."""

from __future__ import annotations

from .dates import (
    days_in_month,
    events_on_day,
    format_date,
    format_month_label,
    format_week_label,
    is_within_range,
    month_range,
    pad_zero,
    shift_view,
    view_range,
    week_dates,
    weeks_in_month,
)
from .time_validation import TimeErrors, time_error_messages

__all__ = [
    "TimeErrors",
    "days_in_month",
    "events_on_day",
    "format_date",
    "format_month_label",
    "format_week_label",
    "is_within_range",
    "month_range",
    "pad_zero",
    "shift_view",
    "time_error_messages",
    "view_range",
    "week_dates",
    "weeks_in_month",
]
