from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from ..config import AppSettings, get_settings
from ..data import EventStoreGateway
from ..data.repositories import EventRepository
from ..domain import Toast, ToastSink, ToastStatus

logger = logging.getLogger(__name__)


def log_toast(toast: Toast) -> None:
    level = logging.ERROR if toast.status is ToastStatus.ERROR else logging.INFO
    logger.log(level, "[%s] %s", toast.status.value, toast.title)


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, gateway, and the toast sink."""

    settings: AppSettings = field(default_factory=get_settings)
    sink: ToastSink = log_toast
    client: Optional[httpx.AsyncClient] = None
    gateway: EventStoreGateway = field(init=False)
    events: EventRepository = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = EventStoreGateway(self.settings.store)
        if self.client is not None:
            self.gateway.use_client(self.client)
        self.events = EventRepository(
            gateway=self.gateway,
            events_path=self.settings.store.events_path,
        )

    async def aclose(self) -> None:
        await self.gateway.aclose()
