"""Field-set introspection for the shapes a schema maps from and to."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, is_typeddict


def _as_dict(values: dict[str, Any]) -> dict[str, Any]:
    return values


@dataclass(frozen=True, slots=True)
class Shape:
    """Named field set plus a builder turning mapped values into an output.

    ``fields`` is ``None`` for an open shape, one whose fields are whatever
    the rules declare.
    """

    name: str
    fields: frozenset[str] | None = None
    build: Callable[[dict[str, Any]], Any] = _as_dict


OPEN_SHAPE = Shape(name="dict")


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, tuple) and hasattr(value, "_fields")


def shape_of(declared: Any) -> Shape:
    """Build a :class:`Shape` from a shape declaration.

    Recognised declarations are ``None`` (open shape), a ``TypedDict`` class,
    a dataclass, a ``NamedTuple`` class or an iterable of field names.
    """
    if declared is None:
        return OPEN_SHAPE
    if isinstance(declared, Shape):
        return declared

    if is_typeddict(declared):
        keys = frozenset(declared.__required_keys__) | frozenset(declared.__optional_keys__)
        return Shape(name=declared.__name__, fields=keys)

    if isinstance(declared, type) and dataclasses.is_dataclass(declared):
        init_fields = frozenset(field.name for field in dataclasses.fields(declared) if field.init)
        return Shape(name=declared.__name__, fields=init_fields, build=lambda values: declared(**values))

    if _is_namedtuple(declared):
        return Shape(name=declared.__name__, fields=frozenset(declared._fields), build=lambda values: declared(**values))

    if isinstance(declared, Iterable) and not isinstance(declared, (str, bytes)):
        names = list(declared)
        if not all(isinstance(name, str) for name in names):
            msg = "shape field names must be strings"
            raise TypeError(msg)
        return Shape(name="dict", fields=frozenset(names))

    msg = f"unsupported shape declaration: {declared!r}"
    raise TypeError(msg)
