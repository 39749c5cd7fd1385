from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import DispatchSettings
from .errors import DispatchRecursionError
from .instrument import EventMethod, collect_event_methods
from .readonly import ReadOnlyView
from .registry import EventRegistry
from .types import CallbackType, Event, Immutable, Mutable, event_name

logger = logging.getLogger(__name__)

H = TypeVar("H", bound="Observable")


class Observable:
    """Mixin giving a host object a callback registry and ``dispatch``.

    Callbacks are stored one per event name. Immutable callbacks receive the
    host wrapped in a :class:`ReadOnlyView`; Mutable callbacks receive the host
    itself and may change it, including its callbacks.

    Subclasses must call ``super().__init__()``. Event methods declared with
    :func:`hostevents.instrument.event` are checked when the subclass is
    created.
    """

    _event_methods: Dict[str, EventMethod] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._event_methods = collect_event_methods(cls)

    def __init__(self, *args: Any, settings: Optional[DispatchSettings] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._observers = EventRegistry()
        self._dispatch_settings = settings or DispatchSettings.default()
        self._dispatch_depth = 0

    @classmethod
    def event_methods(cls) -> Dict[str, EventMethod]:
        return dict(cls._event_methods)

    @property
    def dispatch_settings(self) -> DispatchSettings:
        return self._dispatch_settings

    # ------------------------ Registry access ------------------------
    def get_callback(self, name: Any) -> Optional[CallbackType]:
        return self._observers.get(name)

    def push_callback(self, name: Any, callback: CallbackType) -> None:
        self._observers.set(name, callback)

    def remove_callback(self, name: Any) -> None:
        self._observers.remove(name)

    # ------------------------ Registration surface ------------------------
    def on(self, name: Any, fn: Callable[[Event[Any]], Any]) -> None:
        """Register a read-only callback for ``name``, replacing any previous one."""
        if not callable(fn):
            raise TypeError("callback must be callable")
        self.push_callback(name, Immutable(fn))

    def on_mut(self, name: Any, fn: Callable[[Event[Any]], Any]) -> None:
        """Register a callback for ``name`` that may modify the host."""
        if not callable(fn):
            raise TypeError("callback must be callable")
        self.push_callback(name, Mutable(fn))

    def off(self, name: Any) -> None:
        self.remove_callback(name)

    def off_mut(self, name: Any) -> None:
        self.remove_callback(name)

    def with_callback(self: H, name: Any, fn: Callable[[Event[Any]], Any]) -> H:
        self.on(name, fn)
        return self

    def with_callback_mut(self: H, name: Any, fn: Callable[[Event[Any]], Any]) -> H:
        self.on_mut(name, fn)
        return self

    # ------------------------ Dispatch ------------------------
    def dispatch(self, name: Any, payload: Any = None) -> bool:
        """Invoke the callback registered for ``name``.

        Returns False when nothing is registered, True once the callback ran.

        Raises:
            DispatchRecursionError: if callbacks re-trigger events deeper than
                ``settings.max_depth``.
        """
        key = event_name(name)
        callback = self.get_callback(key)
        if callback is None:
            logger.debug("Dispatching '%s' with no callback registered", key)
            return False

        settings = self._dispatch_settings
        if self._dispatch_depth >= settings.max_depth:
            raise DispatchRecursionError(
                f"dispatch of '{key}' exceeds max depth {settings.max_depth} on {type(self).__name__}"
            )

        if isinstance(callback, Mutable):
            evt: Event[Any] = Event(key, payload, self)
        else:
            evt = Event(key, payload, ReadOnlyView(self))
        logger.debug(
            "Dispatching '%s' to %s callback %s with payload: %r",
            key,
            type(callback).__name__,
            getattr(callback.fn, "__name__", str(callback.fn)),
            payload,
        )

        self._dispatch_depth += 1
        try:
            callback.fn(evt)
        except DispatchRecursionError:
            raise
        except Exception as exc:
            if not settings.swallows_callback_errors:
                raise
            logger.exception("Error in callback for '%s': %s", key, exc)
        finally:
            self._dispatch_depth -= 1
        return True
