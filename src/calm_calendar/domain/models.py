from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional

from .enums import RepeatType, ToastStatus


class EventValidationError(ValueError):
    """Raised when an event record or form cannot be turned into an ``Event``."""


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise EventValidationError(f"date must be formatted YYYY-MM-DD, got {value!r}") from exc
    raise EventValidationError(f"Unsupported date value: {value!r}")


def _parse_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return time.fromisoformat(value)
        except ValueError as exc:
            raise EventValidationError(f"time must be formatted HH:MM, got {value!r}") from exc
    raise EventValidationError(f"Unsupported time value: {value!r}")


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


@dataclass(slots=True)
class RepeatInfo:
    type: RepeatType = RepeatType.NONE
    interval: int = 1
    end_date: Optional[date] = None

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "RepeatInfo":
        if not record:
            return cls()
        if not isinstance(record, dict):
            raise EventValidationError(f"repeat must be an object, got {record!r}")
        end_date = record.get("endDate")
        try:
            repeat_type = RepeatType(record.get("type") or RepeatType.NONE)
            interval = int(record.get("interval", 1))
        except (TypeError, ValueError) as exc:
            raise EventValidationError(f"Invalid repeat record {record!r}: {exc}") from exc
        return cls(
            type=repeat_type,
            interval=interval,
            end_date=_parse_date(end_date) if end_date else None,
        )

    def to_record(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type.value, "interval": self.interval}
        if self.end_date is not None:
            payload["endDate"] = self.end_date.isoformat()
        return payload


@dataclass(slots=True)
class Event:
    """A timed calendar entry. ``id`` is ``None`` until the store assigns one."""

    title: str
    date: date
    start_time: time
    end_time: time
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RepeatInfo = field(default_factory=RepeatInfo)
    notification_time: int = 10
    id: Optional[str] = None

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    def with_id(self, event_id: str) -> "Event":
        return replace(self, id=event_id)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        try:
            identifier = record.get("id")
            return cls(
                id=str(identifier) if identifier else None,
                title=str(record["title"]),
                date=_parse_date(record["date"]),
                start_time=_parse_time(record["startTime"]),
                end_time=_parse_time(record["endTime"]),
                description=record.get("description") or "",
                location=record.get("location") or "",
                category=record.get("category") or "",
                repeat=RepeatInfo.from_record(record.get("repeat")),
                notification_time=int(record.get("notificationTime", 10)),
            )
        except EventValidationError:
            raise
        except KeyError as exc:
            raise EventValidationError(f"Event record is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise EventValidationError(f"Invalid event record: {exc}") from exc

    def to_record(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "date": self.date.isoformat(),
            "startTime": format_time(self.start_time),
            "endTime": format_time(self.end_time),
            "description": self.description,
            "location": self.location,
            "category": self.category,
            "repeat": self.repeat.to_record(),
            "notificationTime": self.notification_time,
        }
        if self.id is not None:
            payload = {"id": self.id, **payload}
        return payload


@dataclass(slots=True)
class EventForm:
    """Raw editor input. Every field may still be empty or malformed."""

    title: str = ""
    date: str = ""
    start_time: str = ""
    end_time: str = ""
    description: str = ""
    location: str = ""
    category: str = ""
    repeat_type: RepeatType = RepeatType.NONE
    repeat_interval: int = 1
    repeat_end_date: str = ""
    notification_time: int = 10
    id: Optional[str] = None

    @classmethod
    def from_event(cls, event: Event) -> "EventForm":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date.isoformat(),
            start_time=format_time(event.start_time),
            end_time=format_time(event.end_time),
            description=event.description,
            location=event.location,
            category=event.category,
            repeat_type=event.repeat.type,
            repeat_interval=event.repeat.interval,
            repeat_end_date=event.repeat.end_date.isoformat() if event.repeat.end_date else "",
            notification_time=event.notification_time,
        )

    def to_event(self) -> Event:
        return Event(
            id=self.id or None,
            title=self.title.strip(),
            date=_parse_date(self.date),
            start_time=_parse_time(self.start_time),
            end_time=_parse_time(self.end_time),
            description=self.description,
            location=self.location,
            category=self.category,
            repeat=RepeatInfo(
                type=self.repeat_type,
                interval=self.repeat_interval,
                end_date=_parse_date(self.repeat_end_date) if self.repeat_end_date else None,
            ),
            notification_time=self.notification_time,
        )


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    message: str


@dataclass(frozen=True, slots=True)
class Toast:
    title: str
    status: ToastStatus
    duration: int = 3000
    is_closable: bool = True


ToastSink = Callable[[Toast], None]
