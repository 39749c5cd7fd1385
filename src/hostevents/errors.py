class HostEventsError(Exception):
    """Base error for hostevents exceptions."""


class EventConfigError(HostEventsError):
    """Raised when an event method is declared or used inconsistently."""


class DispatchRecursionError(HostEventsError):
    """Raised when nested dispatches on one host exceed the configured depth."""


class ReadOnlyError(HostEventsError, AttributeError):
    """Raised when a callback writes through a read-only host view."""


class ConfigError(HostEventsError):
    """Raised when dispatch settings hold invalid values."""
