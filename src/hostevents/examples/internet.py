from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import DispatchSettings
from ..instrument import event
from ..observable import Observable
from ..types import Event, Return

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionEvent:
    """Base for connection status variants.

    ``str()`` gives the event name, so every variant of one kind (every
    ``Error``, whatever its message) dispatches under the same name.
    """

    def __str__(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Connected(ConnectionEvent):
    pass


@dataclass(frozen=True)
class Disconnected(ConnectionEvent):
    pass


@dataclass(frozen=True)
class Waiting(ConnectionEvent):
    pass


@dataclass(frozen=True)
class Error(ConnectionEvent):
    message: str


def render_event(value: ConnectionEvent) -> str:
    """Human readable form: ``Error('boom')`` for errors, the bare name otherwise."""
    if isinstance(value, Error):
        return f"Error('{value.message}')"
    return str(value)


class InternetStuff(Observable):
    """Tracks who is connected and fires an event for every status change."""

    def __init__(self, settings: Optional[DispatchSettings] = None) -> None:
        super().__init__(settings=settings)
        self.person_status_map: Dict[str, ConnectionEvent] = {}
        self.output = ""

    def status_of(self, person: str) -> Optional[ConnectionEvent]:
        return self.person_status_map.get(person)

    @event(Connected(), returns=True, payload_type=Connected)
    def connect(self, person: str) -> None:
        self.person_status_map[str(person)] = Connected()
        return Return(Connected(), None)

    @event(Waiting())
    def wait(self, person: str) -> None:
        self.person_status_map[str(person)] = Waiting()

    @event(Disconnected())
    def disconnect(self, person: str) -> None:
        self.person_status_map[str(person)] = Disconnected()

    @event(Error(""), returns=True, payload_type=Error)
    def error(self, person: str, message: str) -> None:
        err = Error(str(message))
        self.person_status_map[str(person)] = err
        return Return(err, None)

    def __repr__(self) -> str:
        return f"InternetStuff(person_status_map={self.person_status_map!r})"


def record_output(evt: Event[ConnectionEvent]) -> None:
    """Mutable callback storing the rendered event on the host's ``output``."""
    if evt.event is not None:
        evt.src.output = render_event(evt.event)
    else:
        evt.src.output = evt.event_name


def build_demo(settings: Optional[DispatchSettings] = None) -> InternetStuff:
    """Host with ``record_output`` registered for every connection event."""
    return (
        InternetStuff(settings=settings)
        .with_callback_mut(Connected(), record_output)
        .with_callback_mut(Waiting(), record_output)
        .with_callback_mut(Disconnected(), record_output)
        .with_callback_mut(Error("any"), record_output)
    )
