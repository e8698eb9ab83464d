from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from .bootstrap import configure_logging
from .config import get_settings
from .domain import CalendarView, Event, Notification
from .domain.models import format_time
from .services import CalendarSession, EventSyncController, NotificationScheduler, NotificationState, ServiceContext
from .services.http import run_local_server
from .utils.dates import events_on_day, format_date

logger = logging.getLogger(__name__)

_WEEKDAY_HEADER = ["일", "월", "화", "수", "목", "금", "토"]


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("date must be formatted YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calm Calendar command line interface.")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    settings = get_settings()
    serve_parser = subparsers.add_parser("serve", help="Start the local in-memory event store.")
    serve_parser.add_argument("--host", default=settings.server.host)
    serve_parser.add_argument("--port", type=int, default=settings.server.port)
    serve_parser.add_argument("--seed-file", type=Path, default=settings.server.seed_file)

    for name, help_text in (("month", "Print the month grid."), ("week", "Print the week grid.")):
        view_parser = subparsers.add_parser(name, help=help_text)
        view_parser.add_argument("--date", type=_parse_day, default=None)
        view_parser.add_argument("--search", default="")

    search_parser = subparsers.add_parser("search", help="List events matching a search term.")
    search_parser.add_argument("term")
    search_parser.add_argument("--view", choices=[view.value for view in CalendarView], default=None)
    search_parser.add_argument("--date", type=_parse_day, default=None)

    notify_parser = subparsers.add_parser("notify", help="Poll the store and print due reminders.")
    notify_parser.add_argument("--once", action="store_true", help="Evaluate a single tick and exit.")

    return parser


def _describe(event: Event) -> str:
    return f"{event.date.isoformat()} {format_time(event.start_time)}-{format_time(event.end_time)}  {event.title}"


def render_month(session: CalendarSession) -> List[str]:
    lines = [session.title, " ".join(f"{label:>4}" for label in _WEEKDAY_HEADER)]
    holidays = session.holidays()
    visible = session.visible_events()
    for row in session.grid():
        cells = []
        for slot in row:
            if slot is None:
                cells.append("    ")
                continue
            marker = "*" if events_on_day(visible, slot) else " "
            marker = "!" if format_date(session.current_date, slot) in holidays else marker
            cells.append(f"{slot:>3}{marker}")
        lines.append(" ".join(cells))
    for key, name in sorted(holidays.items()):
        lines.append(f"! {key} {name}")
    lines.extend(_event_lines(visible, session))
    return lines


def render_week(session: CalendarSession) -> List[str]:
    lines = [session.title]
    visible = session.visible_events()
    for label, day in zip(_WEEKDAY_HEADER, session.grid()):
        titles = ", ".join(event.title for event in visible if event.date == day)
        lines.append(f"{label} {day.isoformat()}  {titles}".rstrip())
    lines.extend(_event_lines(visible, session))
    return lines


def _event_lines(events: Iterable[Event], session: CalendarSession) -> List[str]:
    lines = [("[알림] " if session.is_notified(event) else "") + _describe(event) for event in events]
    return lines or [session.empty_message() or ""]


async def _with_session(view: Optional[CalendarView], current: Optional[date], search: str) -> CalendarSession:
    context = ServiceContext()
    controller = EventSyncController(context)
    session = CalendarSession(controller, view=view, current_date=current)
    session.search_term = search
    try:
        await controller.load()
        session.scheduler.tick(controller.events)
    finally:
        await context.aclose()
    return session


async def _notify(once: bool) -> None:
    context = ServiceContext()
    controller = EventSyncController(context)
    settings = context.settings

    def _print(notification: Notification) -> None:
        print(notification.message)

    scheduler = NotificationScheduler(
        NotificationState(),
        interval=settings.notifications.tick_interval,
        on_notification=_print,
    )
    try:
        await controller.load()
        if once:
            scheduler.tick(controller.events)
            return
        scheduler.start(lambda: controller.events)
        while True:
            await asyncio.sleep(60)
            await controller.load()
    finally:
        await scheduler.stop()
        await context.aclose()


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, to_file=not args.no_log_file)
    logger.info("Calm Calendar CLI starting: %s", args.command)

    if args.command == "serve":
        run_local_server(host=args.host, port=args.port, seed_file=args.seed_file)
    elif args.command in ("month", "week"):
        view = CalendarView(args.command)
        session = asyncio.run(_with_session(view, args.date, args.search))
        renderer = render_month if view is CalendarView.MONTH else render_week
        print("\n".join(renderer(session)))
    elif args.command == "search":
        view = CalendarView(args.view) if args.view else None
        session = asyncio.run(_with_session(None, args.date, args.term))
        session.view = view
        print("\n".join(_event_lines(session.visible_events(), session)))
    elif args.command == "notify":
        try:
            asyncio.run(_notify(args.once))
        except KeyboardInterrupt:
            logger.info("Notification polling stopped")
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
