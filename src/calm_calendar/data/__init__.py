"""Data access layer."""

from __future__ import annotations

from .gateway import EventNotFoundError, EventStoreError, EventStoreGateway, EventStoreNotConfiguredError

__all__ = [
    "EventNotFoundError",
    "EventStoreError",
    "EventStoreGateway",
    "EventStoreNotConfiguredError",
]
