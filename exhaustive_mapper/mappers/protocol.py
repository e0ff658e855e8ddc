"""Mapper interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, override

from exhaustive_mapper.schema import Schema


if TYPE_CHECKING:
    from collections.abc import Iterable


InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ContextT = TypeVar("ContextT")


class MapperFunction(Protocol):
    """Plain callable form of a mapper, carrying the schema it maps with."""

    schema: Schema

    def __call__(self, source: Any, context: Any = None, /) -> Any: ...


def as_schema(schema: Schema | Mapping[str, Any]) -> Schema:
    """Return ``schema`` unchanged, or wrap a plain rules mapping in an open :class:`Schema`."""
    if isinstance(schema, Schema):
        return schema
    if isinstance(schema, Mapping):
        return Schema(schema)
    msg = f"expected a Schema or a mapping of rules, got {type(schema).__name__}"
    raise TypeError(msg)


class Mapper(ABC, Generic[InputT, OutputT, ContextT]):
    """Stateless executor binding one schema to ``map`` and ``array``."""

    is_async: bool = False

    def __init__(self, schema: Schema | Mapping[str, Any]) -> None:
        super().__init__()
        self._schema = as_schema(schema)

    @property
    def schema(self) -> Schema:
        return self._schema

    @abstractmethod
    def map(self, source: InputT | None, context: ContextT | None = None) -> Any:
        """Map one input to one output; ``None`` passes through."""

    @abstractmethod
    def array(self, source: Iterable[InputT] | None, context: ContextT | None = None) -> Any:
        """Map every item of an iterable to a list of outputs; ``None`` passes through."""

    @abstractmethod
    def to_function(self) -> MapperFunction:
        """Wrap ``map`` in a plain callable exposing ``schema``."""

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._schema!r})"
