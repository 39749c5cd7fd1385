from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

E = TypeVar("E")
R = TypeVar("R")


def event_name(value: Any) -> str:
    """Return the canonical event name for ``value``.

    Strings are used as-is. Enum members keeping the default ``Enum.__str__``
    map to their member name; everything else goes through ``str()``, so a
    variant family can collapse onto one name by sharing a ``__str__``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Enum) and type(value).__str__ is Enum.__str__:
        return value.name
    return str(value)


@dataclass(frozen=True)
class Event(Generic[E]):
    """View handed to a callback for one dispatch.

    Attributes:
        event_name: Canonical name the callback was registered under.
        event: Payload produced by the event method, or None. Only valid while
            the callback runs.
        src: The host for Mutable callbacks, a read-only view for Immutable ones.
    """

    event_name: str
    event: Optional[E]
    src: Any


@dataclass(frozen=True)
class Immutable:
    """Callback that only reads the host."""

    fn: Callable[[Event[Any]], Any]


@dataclass(frozen=True)
class Mutable:
    """Callback allowed to change host state."""

    fn: Callable[[Event[Any]], Any]


CallbackType = Union[Immutable, Mutable]


@dataclass(frozen=True)
class Return(Generic[E, R]):
    """Bundle returned by an event method body declared with ``returns=True``.

    ``evt`` goes to the callback, ``ret`` goes to the caller.
    """

    evt: E
    ret: R = None  # type: ignore[assignment]
