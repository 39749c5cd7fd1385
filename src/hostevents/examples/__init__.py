"""Demo hosts built on the dispatch core."""
from .internet import (
    Connected,
    ConnectionEvent,
    Disconnected,
    Error,
    InternetStuff,
    Waiting,
    build_demo,
    record_output,
    render_event,
)

__all__ = [
    "Connected",
    "ConnectionEvent",
    "Disconnected",
    "Error",
    "InternetStuff",
    "Waiting",
    "build_demo",
    "record_output",
    "render_event",
]
