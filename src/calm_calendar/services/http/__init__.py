"""Local HTTP event store for Calm Calendar."""

from .server import InMemoryEventStore, create_app, load_seed_file, run_local_server

__all__ = [
    "InMemoryEventStore",
    "create_app",
    "load_seed_file",
    "run_local_server",
]
