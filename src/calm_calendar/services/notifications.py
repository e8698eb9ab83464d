from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Set

from ..domain import Event, Notification

logger = logging.getLogger(__name__)

EventsProvider = Callable[[], Iterable[Event]]
Clock = Callable[[], datetime]


def notification_message(event: Event) -> str:
    return f"{event.notification_time}분 후 {event.title} 일정이 시작됩니다."


def due_events(events: Iterable[Event], now: datetime, notified_ids: Set[str]) -> List[Event]:
    """Events whose reminder window ``[start - notification_time, start)`` holds ``now``.

    Ids already in ``notified_ids`` are skipped; the caller records new ones.
    """

    due: list[Event] = []
    for event in events:
        if event.id is None or event.id in notified_ids:
            continue
        minutes_until_start = (event.starts_at - now).total_seconds() / 60
        if 0 < minutes_until_start <= event.notification_time:
            due.append(event)
    return due


@dataclass
class NotificationState:
    """Per-session dedup set and display queue."""

    notified_ids: Set[str] = field(default_factory=set)
    notifications: List[Notification] = field(default_factory=list)

    def reset(self) -> None:
        self.notified_ids.clear()
        self.notifications.clear()


class NotificationScheduler:
    """Re-evaluates due events on a fixed interval and queues reminders once."""

    def __init__(
        self,
        state: Optional[NotificationState] = None,
        *,
        interval: timedelta = timedelta(seconds=1),
        clock: Clock = datetime.now,
        on_notification: Optional[Callable[[Notification], None]] = None,
    ) -> None:
        self.state = state if state is not None else NotificationState()
        self.interval = interval
        self.clock = clock
        self.on_notification = on_notification
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def notifications(self) -> List[Notification]:
        return self.state.notifications

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self, events: Iterable[Event], now: Optional[datetime] = None) -> List[Notification]:
        current = now or self.clock()
        emitted: list[Notification] = []
        for event in due_events(events, current, self.state.notified_ids):
            assert event.id is not None
            notification = Notification(id=event.id, message=notification_message(event))
            self.state.notified_ids.add(event.id)
            self.state.notifications.append(notification)
            emitted.append(notification)
            logger.debug("Queued notification for event %s", event.id)
            if self.on_notification is not None:
                self.on_notification(notification)
        return emitted

    def remove_notification(self, index: int) -> bool:
        if not 0 <= index < len(self.state.notifications):
            return False
        del self.state.notifications[index]
        return True

    def start(self, events_provider: EventsProvider) -> asyncio.Task[None]:
        if self.is_running:
            assert self._task is not None
            return self._task
        self._task = asyncio.create_task(self._run(events_provider))
        logger.debug("Notification scheduler started (interval=%s)", self.interval)
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Notification scheduler stopped")

    async def _run(self, events_provider: EventsProvider) -> None:
        delay = self.interval.total_seconds()
        while True:
            await asyncio.sleep(delay)
            try:
                self.tick(events_provider())
            except Exception:
                logger.exception("Notification tick failed; retrying next interval")
