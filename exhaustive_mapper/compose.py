"""Helpers for building transforms out of other mappers.

Nesting is always explicit: a transform derives the nested input, and
optionally a nested context, then hands them to another mapper.
"""

from __future__ import annotations

from inspect import isawaitable
from typing import TYPE_CHECKING, Any, TypeVar

from exhaustive_mapper.schema.rules import Transform


if TYPE_CHECKING:
    from collections.abc import Callable

    from exhaustive_mapper.mappers import Mapper


_T = TypeVar("_T")


def identity(value: _T) -> _T:
    """Return ``value`` unchanged."""
    return value


def _delegate(
    mapper: Mapper[Any, Any, Any],
    operation: str,
    input_getter: Callable[..., Any],
    context_factory: Callable[..., Any] | None,
) -> Callable[[Any, Any], Any]:
    get_input = Transform(input_getter)
    get_context = Transform(context_factory) if context_factory is not None else None
    run = getattr(mapper, operation)

    if mapper.is_async:

        async def async_nested_transform(source: Any, context: Any) -> Any:
            nested_input = get_input.resolve(source, context)
            if isawaitable(nested_input):
                nested_input = await nested_input
            nested_context = None
            if get_context is not None:
                nested_context = get_context.resolve(source, context)
                if isawaitable(nested_context):
                    nested_context = await nested_context
            return await run(nested_input, nested_context)

        return async_nested_transform

    def nested_transform(source: Any, context: Any) -> Any:
        nested_context = get_context.resolve(source, context) if get_context is not None else None
        return run(get_input.resolve(source, context), nested_context)

    return nested_transform


def nested(
    mapper: Mapper[Any, Any, Any],
    input_getter: Callable[..., Any] = identity,
    context_factory: Callable[..., Any] | None = None,
) -> Callable[[Any, Any], Any]:
    """Return a transform that maps a nested object with ``mapper``.

    ``input_getter`` and ``context_factory`` are called like any transform,
    with ``(input, context)`` of the outer mapping. Without a
    ``context_factory`` the nested mapper gets no context. For an async
    ``mapper`` the returned transform is a coroutine function.
    """
    return _delegate(mapper, "map", input_getter, context_factory)


def nested_array(
    mapper: Mapper[Any, Any, Any],
    input_getter: Callable[..., Any],
    context_factory: Callable[..., Any] | None = None,
) -> Callable[[Any, Any], Any]:
    """Return a transform that maps a nested collection with ``mapper.array``."""
    return _delegate(mapper, "array", input_getter, context_factory)
