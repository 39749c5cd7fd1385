from __future__ import annotations

import dataclasses
import types
from enum import Enum
from typing import Any, Iterator

from .errors import ReadOnlyError

# Values handed out unchanged: immutable scalars, callables and classes
_PASSTHROUGH = (
    str,
    bytes,
    int,
    float,
    complex,
    type(None),
    tuple,
    frozenset,
    Enum,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MappingProxyType,
)


def _is_frozen_dataclass(value: Any) -> bool:
    return (
        dataclasses.is_dataclass(value)
        and not isinstance(value, type)
        and value.__dataclass_params__.frozen
    )


def _freeze(value: Any) -> Any:
    if isinstance(value, _PASSTHROUGH) or isinstance(value, ReadOnlyView) or _is_frozen_dataclass(value):
        return value
    if isinstance(value, dict):
        return types.MappingProxyType(value)
    if isinstance(value, list):
        return tuple(value)
    if isinstance(value, set):
        return frozenset(value)
    return ReadOnlyView(value)


class ReadOnlyView:
    """Read-only proxy over a host object.

    Attribute reads pass through, with mutable values frozen on the way out:
    dicts become mapping proxies, lists become tuples, sets become frozensets
    and other objects are wrapped in a ReadOnlyView of their own. Bound methods
    are re-bound to the view, so a method that assigns to ``self`` raises
    ReadOnlyError; classmethods pass through. ``len``, iteration, ``in`` and
    indexing forward to the target. Containers are frozen one level deep only.
    """

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        object.__setattr__(self, "_target", target)

    def __getattr__(self, name: str) -> Any:
        target = object.__getattribute__(self, "_target")
        value = getattr(target, name)
        if isinstance(value, types.MethodType):
            owner = value.__self__
            # classmethods see only the class
            if isinstance(owner, type):
                return value
            view = self if owner is target else ReadOnlyView(owner)
            return types.MethodType(value.__func__, view)
        return _freeze(value)

    def __len__(self) -> int:
        return len(object.__getattribute__(self, "_target"))

    def __iter__(self) -> Iterator[Any]:
        for item in object.__getattribute__(self, "_target"):
            yield _freeze(item)

    def __contains__(self, item: Any) -> bool:
        return item in object.__getattribute__(self, "_target")

    def __getitem__(self, key: Any) -> Any:
        return _freeze(object.__getattribute__(self, "_target")[key])

    def __bool__(self) -> bool:
        return bool(object.__getattribute__(self, "_target"))

    def __setattr__(self, name: str, value: Any) -> None:
        raise ReadOnlyError(f"cannot set '{name}' through a read-only view")

    def __delattr__(self, name: str) -> None:
        raise ReadOnlyError(f"cannot delete '{name}' through a read-only view")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ReadOnlyView):
            other = object.__getattribute__(other, "_target")
        return object.__getattribute__(self, "_target") == other

    def __hash__(self) -> int:
        return hash(object.__getattribute__(self, "_target"))

    def __str__(self) -> str:
        return str(object.__getattribute__(self, "_target"))

    def __repr__(self) -> str:
        return f"ReadOnlyView({object.__getattribute__(self, '_target')!r})"
