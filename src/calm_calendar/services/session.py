from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

from ..domain import CalendarView, Event, EventForm
from ..utils.dates import (
    format_month_label,
    format_week_label,
    shift_view,
    week_dates,
    weeks_in_month,
)
from .calendar import EventSyncController, SyncResult
from .holidays import holidays_for_month
from .notifications import NotificationScheduler, NotificationState
from .overlap import OverlapGate
from .search import filter_events
from .validation import FormValidator

logger = logging.getLogger(__name__)

NO_RESULTS = "검색 결과가 없습니다."


@dataclass(frozen=True, slots=True)
class SubmitOutcome:
    submitted: bool
    result: Optional[SyncResult] = None
    overlapping: Tuple[Event, ...] = ()


class CalendarSession:
    """The state a calendar screen works from: view window, search term, editor flow."""

    def __init__(
        self,
        controller: EventSyncController,
        *,
        view: Optional[CalendarView] = None,
        current_date: Optional[date] = None,
        scheduler: Optional[NotificationScheduler] = None,
    ) -> None:
        settings = controller.context.settings
        self.controller = controller
        self.view: Optional[CalendarView] = view or settings.ui.default_view
        self.current_date = current_date or date.today()
        self.search_term = ""
        self.overlap_gate = OverlapGate()
        self.validator = FormValidator(controller.context.sink, duration_ms=settings.toasts.duration_ms)
        self.scheduler = scheduler or NotificationScheduler(
            NotificationState(),
            interval=settings.notifications.tick_interval,
        )
        self._pending: Optional[Event] = None

    @property
    def title(self) -> str:
        if self.view is CalendarView.WEEK:
            return format_week_label(self.current_date)
        return format_month_label(self.current_date)

    def set_view(self, view: Optional[CalendarView]) -> None:
        self.view = view

    def navigate(self, step: int) -> date:
        self.current_date = shift_view(self.current_date, self.view, step)
        return self.current_date

    def grid(self) -> Union[List[date], List[List[Optional[int]]]]:
        if self.view is CalendarView.WEEK:
            return week_dates(self.current_date)
        return weeks_in_month(self.current_date)

    def holidays(self) -> Dict[str, str]:
        return holidays_for_month(self.current_date)

    def visible_events(self) -> List[Event]:
        return filter_events(self.controller.events, self.search_term, self.current_date, self.view)

    def empty_message(self) -> Optional[str]:
        return None if self.visible_events() else NO_RESULTS

    def is_notified(self, event: Event) -> bool:
        return event.id is not None and event.id in self.scheduler.state.notified_ids

    async def open(self) -> SyncResult:
        result = await self.controller.load()
        self.scheduler.start(lambda: self.controller.events)
        return result

    async def close(self) -> None:
        await self.scheduler.stop()

    async def submit(self, form: EventForm, *, confirm_overlap: bool = False) -> SubmitOutcome:
        """Validate ``form``, hold it behind the overlap gate if needed, then save."""

        if not self.validator.validate(form):
            return SubmitOutcome(submitted=False)
        event = form.to_event()
        if not confirm_overlap and self.overlap_gate.check(event, self.controller.events):
            logger.info("Holding event %r: overlaps %d event(s)", event.title, len(self.overlap_gate.overlapping))
            self._pending = event
            return SubmitOutcome(submitted=False, overlapping=tuple(self.overlap_gate.overlapping))
        return await self._save(event)

    async def confirm_pending(self) -> Optional[SubmitOutcome]:
        """Save the event held by the overlap gate despite the conflict."""

        if self._pending is None:
            return None
        return await self._save(self._pending)

    def cancel_pending(self) -> None:
        self._pending = None
        self.overlap_gate.close()

    async def _save(self, event: Event) -> SubmitOutcome:
        self.cancel_pending()
        result = await self.controller.save(event)
        return SubmitOutcome(submitted=result.ok, result=result)
