from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ..config.settings import StoreSettings


class EventStoreError(RuntimeError):
    """Raised when the remote event store cannot complete a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EventNotFoundError(EventStoreError):
    """Raised when the remote store has no event with the requested id."""


class EventStoreNotConfiguredError(EventStoreError):
    """Raised when the store base URL is missing."""


@dataclass
class EventStoreGateway:
    """Owns the shared ``httpx.AsyncClient`` used to talk to the event store."""

    settings: StoreSettings
    _client: Optional[httpx.AsyncClient] = None

    def ensure_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise EventStoreNotConfiguredError(f"Event store settings are incomplete: {missing}")
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout.total_seconds(),
        )
        return self._client

    def use_client(self, client: httpx.AsyncClient) -> None:
        self._client = client

    def is_ready(self) -> bool:
        return self._client is not None

    async def aclose(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
