from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from platformdirs import user_log_dir

APP_NAME = "Calm Calendar"
APP_AUTHOR = "CalmCalendar"
LOG_LEVEL = os.getenv("CALM_CALENDAR_LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("CALM_CALENDAR_LOG_DIR") or user_log_dir(APP_NAME, APP_AUTHOR))

_INITIALIZED = False
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    *,
    log_path: Optional[Path] = None,
    to_file: bool = True,
) -> None:
    """Route application logs to the console and, unless ``to_file`` is off, a rotating file.

    ``log_path`` overrides the default ``calm_calendar.log`` under ``LOG_DIR``.
    Later calls are ignored once logging is configured.
    """

    global _INITIALIZED
    if _INITIALIZED:
        return

    log_file = (log_path or LOG_DIR / "calm_calendar.log") if to_file else None
    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured (file=%s)", log_file)
