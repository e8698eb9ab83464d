from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

import orjson
from fastapi import FastAPI, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ...domain import Event, EventValidationError, RepeatType

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_PATH = "/api/events"


class RepeatBody(BaseModel):
    type: RepeatType = RepeatType.NONE
    interval: int = 1
    endDate: Optional[str] = Field(default=None)


class EventBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(default=None)
    title: str
    date: str
    startTime: str
    endTime: str
    description: str = Field(default="")
    location: str = Field(default="")
    category: str = Field(default="")
    repeat: RepeatBody = Field(default_factory=RepeatBody)
    notificationTime: int = Field(default=10)


class EventPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    repeat: Optional[RepeatBody] = None
    notificationTime: Optional[int] = None


class InMemoryEventStore:
    """Ordered id -> record mapping backing the local store server."""

    def __init__(self, seed: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self.records: Dict[str, Dict[str, Any]] = {}
        for record in seed or []:
            self.insert(dict(record))

    def list(self) -> List[Dict[str, Any]]:
        return list(self.records.values())

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        record["id"] = str(record.get("id") or uuid4())
        self.records[record["id"]] = record
        return record

    def merge(self, event_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        existing = self.records.get(event_id)
        if existing is None:
            return None
        merged = {**existing, **changes, "id": event_id}
        self.records[event_id] = merged
        return merged

    def remove(self, event_id: str) -> None:
        self.records.pop(event_id, None)


def _validated(record: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return Event.from_record(record).to_record()
    except EventValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def load_seed_file(path: Path) -> List[Dict[str, Any]]:
    payload = orjson.loads(path.read_bytes())
    if isinstance(payload, dict):
        return list(payload.get("events") or [])
    return list(payload)


def create_app(
    seed: Optional[Iterable[Dict[str, Any]]] = None,
    *,
    events_path: str = DEFAULT_EVENTS_PATH,
) -> FastAPI:
    app = FastAPI(title="Calm Calendar Event Store", version="0.1.0")
    store = InMemoryEventStore(seed)
    app.state.store = store
    item_path = events_path.rstrip("/") + "/{event_id}"

    @app.get(events_path)
    async def list_events() -> JSONResponse:
        return JSONResponse({"events": store.list()})

    @app.post(events_path, status_code=201)
    async def create_event(body: EventBody) -> JSONResponse:
        record = store.insert(_validated(body.model_dump()))
        logger.debug("Created event %s", record["id"])
        return JSONResponse(record, status_code=201)

    @app.put(item_path)
    async def update_event(event_id: str, body: EventPatch) -> JSONResponse:
        changes = body.model_dump(exclude_unset=True)
        existing = store.records.get(event_id)
        if existing is None:
            logger.info("Update for unknown event %s", event_id)
            return JSONResponse({"message": "Event not found"}, status_code=404)
        record = store.merge(event_id, _validated({**existing, **changes}))
        return JSONResponse(record)

    @app.delete(item_path, status_code=204)
    async def delete_event(event_id: str) -> Response:
        store.remove(event_id)
        return Response(status_code=204)

    return app


def run_local_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    seed_file: Optional[Path] = None,
    events_path: str = DEFAULT_EVENTS_PATH,
) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    seed = load_seed_file(seed_file) if seed_file else None
    app = create_app(seed, events_path=events_path)
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving event store on %s:%s%s", host, port, events_path)
    asyncio.run(serve(app, config))
