"""
hostevents: a small single-slot event dispatch core.

- EventRegistry maps event names to one callback each
- Observable gives a host object on/off registration and dispatch
- @event turns a host method into one that dispatches after it runs

Immutable callbacks see the host through a read-only view; Mutable callbacks
get the host itself.
"""
from .config import DispatchSettings
from .errors import (
    ConfigError,
    DispatchRecursionError,
    EventConfigError,
    HostEventsError,
    ReadOnlyError,
)
from .instrument import EventMethod, event
from .observable import Observable
from .readonly import ReadOnlyView
from .registry import EventRegistry
from .types import CallbackType, Event, Immutable, Mutable, Return, event_name

__version__ = "0.1.0"

__all__ = [
    "CallbackType",
    "ConfigError",
    "DispatchRecursionError",
    "DispatchSettings",
    "Event",
    "EventConfigError",
    "EventMethod",
    "EventRegistry",
    "HostEventsError",
    "Immutable",
    "Mutable",
    "Observable",
    "ReadOnlyError",
    "ReadOnlyView",
    "Return",
    "event",
    "event_name",
]
