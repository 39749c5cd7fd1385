from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .types import CallbackType, Immutable, Mutable, event_name

logger = logging.getLogger(__name__)


class EventRegistry:
    """Single-slot mapping from event name to callback.

    Each name holds at most one callback; setting a name again replaces the
    previous one. There is no fan-out and no subscription handle.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[str, CallbackType] = {}

    def get(self, name: Any) -> Optional[CallbackType]:
        """Return the callback stored under ``name``, or None."""
        return self._callbacks.get(event_name(name))

    def set(self, name: Any, callback: CallbackType) -> None:
        """Store ``callback`` under ``name``, discarding any previous one."""
        if not isinstance(callback, (Immutable, Mutable)):
            raise TypeError("callback must be an Immutable or Mutable wrapper")
        key = event_name(name)
        replaced = self._callbacks.get(key)
        self._callbacks[key] = callback
        logger.debug(
            "Registered %s callback %s for '%s'%s",
            type(callback).__name__,
            getattr(callback.fn, "__name__", str(callback.fn)),
            key,
            " (replaced previous)" if replaced is not None else "",
        )

    def remove(self, name: Any) -> None:
        """Remove the callback for ``name``. Unknown names are ignored."""
        key = event_name(name)
        if self._callbacks.pop(key, None) is not None:
            logger.debug("Removed callback for '%s'", key)

    def names(self) -> List[str]:
        return list(self._callbacks)

    def clear(self) -> None:
        """Remove all callbacks (useful in tests)."""
        self._callbacks.clear()

    def __contains__(self, name: Any) -> bool:
        return event_name(name) in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)
