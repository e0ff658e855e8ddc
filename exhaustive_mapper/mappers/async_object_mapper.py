"""Asynchronous schema-driven object mapper."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, override

from exhaustive_mapper.omit import OmitProperty

from .protocol import ContextT, InputT, Mapper, MapperFunction, OutputT


if TYPE_CHECKING:
    from collections.abc import Iterable

    from exhaustive_mapper.schema import Rule, Schema


async def _resolve(rule: Rule, source: Any, context: Any) -> Any:
    value = rule.resolve(source, context)
    if isawaitable(value):
        value = await value
    return value


class AsyncObjectMapper(Mapper[InputT, OutputT, ContextT]):
    """Like :class:`ObjectMapper`, but transforms may be coroutines.

    With ``concurrent=True`` (the default) the rules of one ``map`` call run
    concurrently, and so do the items of a sequence passed to ``array``.
    Results are always assembled in declaration and input order. If any
    transform raises, the call raises that same exception and produces no
    output. Cancelling the call cancels transforms still in flight.
    """

    is_async = True

    def __init__(self, schema: Schema | Mapping[str, Any], *, concurrent: bool = True) -> None:
        super().__init__(schema)
        self._concurrent = concurrent

    @property
    def concurrent(self) -> bool:
        return self._concurrent

    async def _resolve_all(self, source: Any, context: Any) -> list[Any]:
        rules = self._schema.rules
        if self._concurrent:
            return list(await asyncio.gather(*(_resolve(rule, source, context) for _, rule in rules)))
        return [await _resolve(rule, source, context) for _, rule in rules]

    @override
    async def map(self, source: InputT | None, context: ContextT | None = None) -> OutputT | None:
        """Map ``source`` once every rule has resolved."""
        self._schema.require_context(context)
        if source is None:
            return None

        resolved = await self._resolve_all(source, context)
        values = {
            name: value
            for (name, _), value in zip(self._schema.rules, resolved, strict=True)
            if value is not OmitProperty
        }
        return self._schema.build(values)

    @override
    async def array(self, source: Iterable[InputT] | None, context: ContextT | None = None) -> list[OutputT] | None:
        """Map each item of ``source`` into a new list, keeping order.

        Sequences are mapped concurrently; other iterables are consumed one
        item at a time.
        """
        self._schema.require_context(context)
        if source is None:
            return None
        if self._concurrent and isinstance(source, Sequence):
            return list(await asyncio.gather(*(self.map(item, context) for item in source)))
        return [await self.map(item, context) for item in source]

    @override
    def to_function(self) -> MapperFunction:
        async def mapper_function(source: InputT | None, context: ContextT | None = None, /) -> OutputT | None:
            return await self.map(source, context)

        mapper_function.schema = self._schema  # type: ignore[attr-defined]
        return mapper_function  # type: ignore[return-value]
