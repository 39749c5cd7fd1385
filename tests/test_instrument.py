from dataclasses import dataclass
from enum import Enum

import pytest

from hostevents import EventConfigError, EventMethod, Observable, ReadOnlyError, Return, event


@dataclass(frozen=True)
class Reading:
    celsius: float


class Signal(Enum):
    RESET = "reset"


class Thermometer(Observable):
    def __init__(self) -> None:
        super().__init__()
        self.samples = []

    @event("Sampled", returns=True, payload_type=Reading)
    def sample(self, celsius: float) -> int:
        """Record a sample and return how many are stored."""
        self.samples.append(celsius)
        return Return(Reading(celsius), len(self.samples))

    @event(Signal.RESET)
    def reset(self) -> str:
        self.samples.clear()
        return "cleared"

    @event("Failed")
    def fail(self) -> None:
        raise ValueError("sensor offline")

    @event("Sampled", returns=True, payload_type=Reading)
    def sample_twice(self, celsius: float) -> int:
        self.samples.extend([celsius, celsius])
        return Return(Reading(celsius), len(self.samples))

    @event("Broken", returns=True)
    def broken(self) -> int:
        return 5

    @event("Mistyped", returns=True, payload_type=Reading)
    def mistyped(self) -> None:
        return Return("not a reading", None)


def _raises_config_error(info) -> bool:
    # __set_name__ errors are wrapped in RuntimeError before Python 3.12
    err = info.value
    return isinstance(err, EventConfigError) or isinstance(err.__cause__, EventConfigError)


def test_payload_goes_to_callback_and_return_value_to_caller():
    t = Thermometer()
    payloads = []
    t.on("Sampled", lambda evt: payloads.append(evt.event))

    assert t.sample(21.5) == 1
    assert t.sample(22.0) == 2

    # each callback sees the payload of its own invocation
    assert payloads == [Reading(21.5), Reading(22.0)]


def test_method_without_payload_returns_body_result():
    t = Thermometer()
    events = []
    t.on(Signal.RESET, lambda evt: events.append((evt.event_name, evt.event)))
    t.samples.append(1.0)

    assert t.reset() == "cleared"
    assert t.samples == []
    assert events == [("RESET", None)]


def test_event_method_without_callback_still_runs():
    t = Thermometer()
    assert t.sample(10.0) == 1
    assert t.samples == [10.0]


def test_body_failure_propagates_and_suppresses_dispatch():
    t = Thermometer()
    called = []
    t.on("Failed", lambda evt: called.append(evt))

    with pytest.raises(ValueError, match="sensor offline"):
        t.fail()

    assert called == []


def test_missing_return_bundle_is_a_config_error_and_not_dispatched():
    t = Thermometer()
    called = []
    t.on("Broken", lambda evt: called.append(evt))

    with pytest.raises(EventConfigError):
        t.broken()

    assert called == []


def test_payload_type_mismatch_is_rejected():
    t = Thermometer()
    with pytest.raises(EventConfigError):
        t.mistyped()


def test_methods_sharing_a_name_share_the_callback():
    t = Thermometer()
    payloads = []
    t.on_mut("Sampled", lambda evt: payloads.append(evt.event.celsius))

    t.sample(1.0)
    t.sample_twice(2.0)

    assert payloads == [1.0, 2.0]


def test_wrapper_keeps_metadata():
    method = Thermometer.__dict__["sample"]
    assert isinstance(method, EventMethod)
    assert Thermometer.sample.__name__ == "sample"
    assert "Record a sample" in Thermometer.sample.__doc__
    assert method.event_name == "Sampled"
    assert method.returns is True
    assert method.payload_type is Reading
    assert Thermometer.reset.event_name == "RESET"


def test_event_methods_listed_on_class():
    methods = Thermometer.event_methods()
    assert set(methods) == {"sample", "reset", "fail", "sample_twice", "broken", "mistyped"}


def test_mutable_callback_can_call_other_event_methods():
    t = Thermometer()
    order = []
    t.on_mut("Sampled", lambda evt: (order.append("sampled"), evt.src.reset()))
    t.on("RESET", lambda evt: order.append("reset"))

    assert t.sample(5.0) == 1
    assert order == ["sampled", "reset"]
    assert t.samples == []


def test_immutable_callback_cannot_mutate_through_event_methods():
    t = Thermometer()
    t.on("Sampled", lambda evt: evt.src.sample(1.0))

    with pytest.raises((ReadOnlyError, AttributeError)):
        t.sample(2.0)

    assert t.samples == [2.0]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "X", "payload_type": Reading},
        {"name": "X", "returns": True, "payload_type": "Reading"},
    ],
)
def test_bad_decorator_arguments_fail_fast(kwargs):
    name = kwargs.pop("name")
    with pytest.raises(EventConfigError):
        event(name, **kwargs)


def test_wrapping_staticmethod_is_rejected():
    with pytest.raises(EventConfigError):
        event("X")(staticmethod(lambda: None))


def test_conflicting_declarations_fail_at_class_creation():
    with pytest.raises(EventConfigError):

        class Conflicted(Observable):
            @event("Changed", returns=True, payload_type=Reading)
            def a(self):
                return Return(Reading(0.0), None)

            @event("Changed")
            def b(self):
                return None


def test_conflict_with_inherited_event_method_detected():
    with pytest.raises(EventConfigError):

        class Child(Thermometer):
            @event("Sampled")
            def quick(self):
                return None


def test_overriding_event_method_with_plain_method_drops_it():
    class Quiet(Thermometer):
        def fail(self):
            return "ok"

    assert "fail" not in Quiet.event_methods()
    q = Quiet()
    called = []
    q.on("Failed", lambda evt: called.append(evt))
    assert q.fail() == "ok"
    assert called == []


def test_event_method_on_non_observable_class_rejected():
    with pytest.raises(Exception) as info:

        class Plain:
            @event("Nope")
            def go(self):
                return None

    assert _raises_config_error(info)
