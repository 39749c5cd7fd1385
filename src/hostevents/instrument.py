"""Turn plain host methods into event-emitting methods.

An event method runs its body, dispatches its event through the host, and
returns the body's result to the caller::

    class Door(Observable):
        @event("Opened")
        def open(self):
            self.is_open = True

        @event("Knocked", returns=True, payload_type=Knock)
        def knock(self, who):
            return Return(Knock(who), len(who))

With ``returns=True`` the body hands back a :class:`~hostevents.types.Return`
bundle: ``evt`` is forwarded to the callback, ``ret`` to the caller. If the
body raises, nothing is dispatched.
"""
from __future__ import annotations

import functools
import logging
import types
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import EventConfigError
from .types import Return, event_name

logger = logging.getLogger(__name__)


class EventMethod:
    """Descriptor produced by :func:`event`."""

    def __init__(
        self,
        fn: Callable[..., Any],
        name: Any,
        returns: bool = False,
        payload_type: Optional[type] = None,
    ) -> None:
        if isinstance(fn, (staticmethod, classmethod)) or not callable(fn):
            raise EventConfigError(f"@event can only wrap plain methods, got {fn!r}")
        functools.update_wrapper(self, fn)
        self.fn = fn
        self.event_name = event_name(name)
        self.returns = bool(returns)
        self.payload_type = payload_type
        self.attr_name = getattr(fn, "__name__", self.event_name)

    @property
    def signature(self) -> Tuple[bool, Optional[type]]:
        """What callbacks registered for this name can expect to receive."""
        return self.returns, self.payload_type

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr_name = name
        if not callable(getattr(owner, "dispatch", None)):
            raise EventConfigError(
                f"{owner.__name__}.{name} is an event method but {owner.__name__} is not Observable"
            )

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __call__(self, host: Any, *args: Any, **kwargs: Any) -> Any:
        result = self.fn(host, *args, **kwargs)
        if not self.returns:
            host.dispatch(self.event_name, None)
            return result
        if not isinstance(result, Return):
            raise EventConfigError(
                f"{self.attr_name} is declared with returns=True and must return a Return bundle, "
                f"got {type(result).__name__}"
            )
        if self.payload_type is not None and not isinstance(result.evt, self.payload_type):
            raise EventConfigError(
                f"{self.attr_name} produced a {type(result.evt).__name__} payload, "
                f"expected {self.payload_type.__name__}"
            )
        host.dispatch(self.event_name, result.evt)
        return result.ret

    def __repr__(self) -> str:
        return f"<event method {self.attr_name} -> '{self.event_name}'>"


def event(
    name: Any,
    *,
    returns: bool = False,
    payload_type: Optional[type] = None,
) -> Callable[[Callable[..., Any]], EventMethod]:
    """Declare a host method as emitting ``name`` after it runs.

    Args:
        name: Event name, or any value whose canonical name should be used.
        returns: When True the body returns ``Return(evt, ret)`` and ``evt`` is
            forwarded as the payload. Otherwise the callback gets no payload.
        payload_type: Optional type the forwarded payload must be an instance of.

    Raises:
        EventConfigError: for an empty name or a payload type without
            ``returns=True``.
    """
    canonical = event_name(name)
    if not canonical:
        raise EventConfigError("event name must be a non-empty string")
    if payload_type is not None:
        if not returns:
            raise EventConfigError(f"payload_type for '{canonical}' requires returns=True")
        if not isinstance(payload_type, type):
            raise EventConfigError(f"payload_type for '{canonical}' must be a type, got {payload_type!r}")

    def decorator(fn: Callable[..., Any]) -> EventMethod:
        return EventMethod(fn, canonical, returns=returns, payload_type=payload_type)

    return decorator


def collect_event_methods(cls: type) -> Dict[str, EventMethod]:
    """Return the event methods visible on ``cls`` keyed by attribute name.

    Raises EventConfigError when two of them share an event name but disagree
    on whether, or what type of, payload they forward.
    """
    found: Dict[str, EventMethod] = {}
    for klass in reversed(cls.__mro__):
        for attr, value in vars(klass).items():
            if isinstance(value, EventMethod):
                found[attr] = value
            elif attr in found:
                del found[attr]

    by_name: Dict[str, EventMethod] = {}
    for method in found.values():
        other = by_name.setdefault(method.event_name, method)
        if other is not method and other.signature != method.signature:
            raise EventConfigError(
                f"{cls.__name__}: event '{method.event_name}' is declared by "
                f"{other.attr_name} (returns={other.returns}, payload_type={other.payload_type}) and "
                f"{method.attr_name} (returns={method.returns}, payload_type={method.payload_type})"
            )
    logger.debug("%s declares event methods: %s", cls.__name__, ", ".join(sorted(found)) or "none")
    return found
