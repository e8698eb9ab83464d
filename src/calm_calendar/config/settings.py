from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..domain import CalendarView

load_dotenv()


@dataclass(frozen=True)
class StoreSettings:
    base_url: Optional[str]
    events_path: str
    timeout: timedelta

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.base_url:
            missing.append("CALM_STORE_URL")
        return missing


@dataclass(frozen=True)
class NotificationSettings:
    tick_interval: timedelta


@dataclass(frozen=True)
class ToastSettings:
    duration_ms: int
    brief_duration_ms: int


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    seed_file: Optional[Path]


@dataclass(frozen=True)
class UiSettings:
    default_view: CalendarView


@dataclass(frozen=True)
class AppSettings:
    store: StoreSettings
    notifications: NotificationSettings
    toasts: ToastSettings
    server: ServerSettings
    ui: UiSettings


def _seconds_from_env(name: str, default_seconds: float) -> timedelta:
    raw = os.getenv(name)
    if not raw:
        return timedelta(seconds=default_seconds)
    try:
        seconds = float(raw)
    except ValueError:
        return timedelta(seconds=default_seconds)
    return timedelta(seconds=seconds)


def _view_from_env(name: str, default: CalendarView) -> CalendarView:
    raw = (os.getenv(name) or "").strip().lower()
    try:
        return CalendarView(raw) if raw else default
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    server = ServerSettings(
        host=os.getenv("CALM_SERVER_HOST", "127.0.0.1"),
        port=int(os.getenv("CALM_SERVER_PORT", "8000")),
        seed_file=Path(os.environ["CALM_SERVER_SEED_FILE"]) if os.getenv("CALM_SERVER_SEED_FILE") else None,
    )

    store = StoreSettings(
        base_url=os.getenv("CALM_STORE_URL", f"http://{server.host}:{server.port}"),
        events_path=os.getenv("CALM_STORE_EVENTS_PATH", "/api/events"),
        timeout=_seconds_from_env("CALM_STORE_TIMEOUT_SECONDS", 10),
    )

    notifications = NotificationSettings(
        tick_interval=_seconds_from_env("CALM_NOTIFY_TICK_SECONDS", 1),
    )

    toasts = ToastSettings(
        duration_ms=int(os.getenv("CALM_TOAST_DURATION_MS", "3000")),
        brief_duration_ms=int(os.getenv("CALM_TOAST_BRIEF_DURATION_MS", "1000")),
    )

    ui = UiSettings(
        default_view=_view_from_env("CALM_DEFAULT_VIEW", CalendarView.MONTH),
    )

    return AppSettings(store=store, notifications=notifications, toasts=toasts, server=server, ui=ui)
