from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List

import httpx

from ...domain import Event
from ..gateway import EventNotFoundError, EventStoreError, EventStoreGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EventRepository:
    gateway: EventStoreGateway
    events_path: str

    def _item_path(self, event_id: str) -> str:
        return f"{self.events_path.rstrip('/')}/{event_id}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self.gateway.ensure_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise EventStoreError(f"{method} {path} failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            raise EventNotFoundError(f"{method} {path}: event not found", status_code=response.status_code)
        if response.is_error:
            raise EventStoreError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _payload(self, response: httpx.Response, method: str, path: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise EventStoreError(f"{method} {path} returned invalid JSON") from exc

    def _event(self, response: httpx.Response, method: str, path: str) -> Event:
        payload = self._payload(response, method, path)
        if not isinstance(payload, dict):
            raise EventStoreError(f"{method} {path} returned {type(payload).__name__}, expected an event object")
        return Event.from_record(payload)

    async def fetch_all(self) -> List[Event]:
        response = await self._request("GET", self.events_path)
        payload = self._payload(response, "GET", self.events_path)
        if not isinstance(payload, dict):
            raise EventStoreError(f"GET {self.events_path} returned {type(payload).__name__}, expected an object")
        records = payload.get("events") or []
        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            raise EventStoreError(f"GET {self.events_path} returned a malformed event list")
        return [Event.from_record(record) for record in records]

    async def create(self, event: Event) -> Event:
        response = await self._request("POST", self.events_path, json=event.to_record())
        return self._event(response, "POST", self.events_path)

    async def update(self, event: Event) -> Event:
        if event.id is None:
            raise EventNotFoundError("Cannot update an event without an id.")
        path = self._item_path(event.id)
        response = await self._request("PUT", path, json=event.to_record())
        return self._event(response, "PUT", path)

    async def delete(self, event_id: str) -> None:
        await self._request("DELETE", self._item_path(event_id))
