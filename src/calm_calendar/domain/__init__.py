"""Domain models for the event calendar."""

from __future__ import annotations

from .enums import CalendarView, RepeatType, ToastStatus
from .models import Event, EventForm, EventValidationError, Notification, RepeatInfo, Toast, ToastSink

__all__ = [
    "CalendarView",
    "Event",
    "EventForm",
    "EventValidationError",
    "Notification",
    "RepeatInfo",
    "RepeatType",
    "Toast",
    "ToastSink",
    "ToastStatus",
]
