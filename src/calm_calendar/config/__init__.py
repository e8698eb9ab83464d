"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    NotificationSettings,
    ServerSettings,
    StoreSettings,
    ToastSettings,
    UiSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "NotificationSettings",
    "ServerSettings",
    "StoreSettings",
    "ToastSettings",
    "UiSettings",
    "get_settings",
]
