from __future__ import annotations

from datetime import date, time, timedelta
from typing import Any, Callable, Dict, List

import httpx
import pytest

from calm_calendar.config import (
    AppSettings,
    NotificationSettings,
    ServerSettings,
    StoreSettings,
    ToastSettings,
    UiSettings,
)
from calm_calendar.domain import CalendarView, Event, RepeatInfo, RepeatType, Toast
from calm_calendar.services import EventSyncController, ServiceContext
from calm_calendar.services.http import create_app

EXISTING_MEETING: Dict[str, Any] = {
    "id": "1",
    "title": "기존 회의",
    "date": "2024-10-15",
    "startTime": "09:00",
    "endTime": "10:00",
    "description": "기존 팀 미팅",
    "location": "회의실 B",
    "category": "업무",
    "repeat": {"type": "none", "interval": 0},
    "notificationTime": 10,
}


@pytest.fixture
def make_event() -> Callable[..., Event]:
    def _make_event(**overrides: Any) -> Event:
        values: Dict[str, Any] = {
            "id": "1",
            "title": "테스트 이벤트",
            "date": date(2024, 11, 10),
            "start_time": time(9, 0),
            "end_time": time(10, 0),
            "repeat": RepeatInfo(type=RepeatType.NONE, interval=0),
            "notification_time": 0,
        }
        values.update(overrides)
        return Event(**values)

    return _make_event


@pytest.fixture
def sample_events() -> List[Event]:
    return [
        Event(
            id="1",
            title="이벤트 1",
            date=date(2024, 7, 1),
            start_time=time(10, 0),
            end_time=time(11, 0),
            description="설명 1",
            location="항해플러스 부산 캠퍼스",
            category="워크샵",
            repeat=RepeatInfo(type=RepeatType.NONE, interval=1),
            notification_time=10,
        ),
        Event(
            id="2",
            title="이벤트 2",
            date=date(2024, 7, 2),
            start_time=time(14, 0),
            end_time=time(15, 0),
            description="설명 2",
            location="항해플러스 서울 선릉 캠퍼스",
            category="세미나",
            repeat=RepeatInfo(type=RepeatType.DAILY, interval=1, end_date=date(2024, 7, 10)),
            notification_time=20,
        ),
        Event(
            id="3",
            title="이벤트 3",
            date=date(2024, 7, 10),
            start_time=time(9, 0),
            end_time=time(10, 0),
            description="설명 3",
            location="항해 플러스 서울 강동 캠퍼스",
            category="회의",
            repeat=RepeatInfo(type=RepeatType.WEEKLY, interval=1),
            notification_time=5,
        ),
        Event(
            id="4",
            title="이벤트 4",
            date=date(2024, 7, 30),
            start_time=time(13, 0),
            end_time=time(14, 0),
            description="설명 4",
            location="항해 플러스 인천 캠퍼스",
            category="컨퍼런스",
            repeat=RepeatInfo(type=RepeatType.MONTHLY, interval=1),
            notification_time=15,
        ),
        Event(
            id="5",
            title="이벤트 5",
            date=date(2024, 8, 1),
            start_time=time(11, 0),
            end_time=time(12, 0),
            description="설명 5",
            location="항해 플러스 수원 캠퍼스",
            category="워크샵",
            repeat=RepeatInfo(type=RepeatType.YEARLY, interval=1),
            notification_time=30,
        ),
    ]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        store=StoreSettings(base_url="http://test", events_path="/api/events", timeout=timedelta(seconds=5)),
        notifications=NotificationSettings(tick_interval=timedelta(seconds=1)),
        toasts=ToastSettings(duration_ms=3000, brief_duration_ms=1000),
        server=ServerSettings(host="127.0.0.1", port=8000, seed_file=None),
        ui=UiSettings(default_view=CalendarView.MONTH),
    )


@pytest.fixture
def toasts() -> List[Toast]:
    return []


@pytest.fixture
def store_app():
    return create_app([dict(EXISTING_MEETING)])


@pytest.fixture
async def http_client(store_app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=store_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def context(settings: AppSettings, toasts: List[Toast], http_client: httpx.AsyncClient) -> ServiceContext:
    return ServiceContext(settings=settings, sink=toasts.append, client=http_client)


@pytest.fixture
def controller(context: ServiceContext) -> EventSyncController:
    return EventSyncController(context)


@pytest.fixture
def existing_meeting() -> Dict[str, Any]:
    return dict(EXISTING_MEETING)
