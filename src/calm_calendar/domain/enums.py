from __future__ import annotations

from enum import Enum


class RepeatType(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class CalendarView(str, Enum):
    WEEK = "week"
    MONTH = "month"


class ToastStatus(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
