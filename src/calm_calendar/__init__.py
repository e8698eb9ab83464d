"""Calm Calendar: calendar grids, event search, overlap checks and reminders."""

from __future__ import annotations

__all__ = ["main"]


def main() -> None:
    from .cli import main as run_cli

    run_cli()
