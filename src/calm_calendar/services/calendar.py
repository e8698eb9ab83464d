from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..data import EventStoreError
from ..domain import Event, EventValidationError, Toast, ToastStatus
from .context import ServiceContext
from .validation import INVALID_TIME_RANGE

logger = logging.getLogger(__name__)

LOAD_SUCCEEDED = "일정 로딩 완료!"
LOAD_FAILED = "이벤트 로딩 실패"
CREATE_SUCCEEDED = "일정이 추가되었습니다."
UPDATE_SUCCEEDED = "일정이 수정되었습니다."
SAVE_FAILED = "일정 저장 실패"
DELETE_SUCCEEDED = "일정이 삭제되었습니다."
DELETE_FAILED = "일정 삭제 실패"

_STORE_FAILURES = (EventStoreError, EventValidationError)


class SyncAction(str, Enum):
    LOAD = "load"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one controller call; ``events`` is the reconciled local list."""

    ok: bool
    action: SyncAction
    events: Tuple[Event, ...]
    event: Optional[Event] = None
    error: Optional[str] = None


class EventSyncController:
    """Keeps the local event list in step with the remote store.

    Every successful mutation is followed by a full re-fetch rather than
    patching the list from the mutation response. Failed calls leave the
    list untouched and raise exactly one error toast. Nothing is retried.
    """

    def __init__(self, context: ServiceContext) -> None:
        self.context = context
        self._events: List[Event] = []

    @property
    def events(self) -> List[Event]:
        return list(self._events)

    def snapshot(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def _reconcile(self, events: Iterable[Event]) -> None:
        self._events = list(events)

    def _notify(self, title: str, status: ToastStatus, *, brief: bool = False) -> None:
        toasts = self.context.settings.toasts
        duration = toasts.brief_duration_ms if brief else toasts.duration_ms
        self.context.sink(Toast(title=title, status=status, duration=duration, is_closable=True))

    def _result(self, ok: bool, action: SyncAction, **kwargs) -> SyncResult:
        return SyncResult(ok=ok, action=action, events=self.snapshot(), **kwargs)

    async def _refetch(self) -> None:
        try:
            events = await self.context.events.fetch_all()
        except _STORE_FAILURES as exc:
            logger.warning("Re-fetch after mutation failed; keeping previous list: %s", exc)
            return
        self._reconcile(events)

    async def load(self) -> SyncResult:
        try:
            events = await self.context.events.fetch_all()
        except _STORE_FAILURES as exc:
            logger.warning("Loading events failed: %s", exc)
            self._reconcile([])
            self._notify(LOAD_FAILED, ToastStatus.ERROR)
            return self._result(False, SyncAction.LOAD, error=str(exc))
        self._reconcile(events)
        logger.info("Loaded %d events", len(events))
        self._notify(LOAD_SUCCEEDED, ToastStatus.INFO, brief=True)
        return self._result(True, SyncAction.LOAD)

    async def save(self, event: Event) -> SyncResult:
        editing = event.id is not None
        action = SyncAction.UPDATE if editing else SyncAction.CREATE
        if event.start_time >= event.end_time:
            logger.debug("Rejected %s with start %s >= end %s", action.value, event.start_time, event.end_time)
            self._notify(INVALID_TIME_RANGE, ToastStatus.ERROR)
            return self._result(False, action, event=event, error=INVALID_TIME_RANGE)

        try:
            if editing:
                saved = await self.context.events.update(event)
            else:
                saved = await self.context.events.create(event)
        except _STORE_FAILURES as exc:
            logger.warning("Saving event %s failed: %s", event.id or "<new>", exc)
            self._notify(SAVE_FAILED, ToastStatus.ERROR)
            return self._result(False, action, event=event, error=str(exc))

        await self._refetch()
        logger.info("Event %s %sd", saved.id, action.value)
        self._notify(UPDATE_SUCCEEDED if editing else CREATE_SUCCEEDED, ToastStatus.SUCCESS)
        return self._result(True, action, event=saved)

    async def delete(self, event_id: str) -> SyncResult:
        try:
            await self.context.events.delete(event_id)
        except _STORE_FAILURES as exc:
            logger.warning("Deleting event %s failed: %s", event_id, exc)
            self._notify(DELETE_FAILED, ToastStatus.ERROR)
            return self._result(False, SyncAction.DELETE, error=str(exc))

        await self._refetch()
        logger.info("Event %s deleted", event_id)
        self._notify(DELETE_SUCCEEDED, ToastStatus.INFO)
        return self._result(True, SyncAction.DELETE)
