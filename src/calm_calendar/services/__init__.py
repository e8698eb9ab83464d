"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .calendar import EventSyncController, SyncAction, SyncResult
from .context import ServiceContext
from .notifications import NotificationScheduler, NotificationState
from .overlap import OverlapGate, find_overlapping
from .search import filter_events
from .session import CalendarSession, SubmitOutcome
from .validation import FormValidator

__all__ = [
    "CalendarSession",
    "EventSyncController",
    "FormValidator",
    "NotificationScheduler",
    "NotificationState",
    "OverlapGate",
    "ServiceContext",
    "SubmitOutcome",
    "SyncAction",
    "SyncResult",
    "filter_events",
    "find_overlapping",
]
