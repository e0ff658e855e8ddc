"""Synchronous schema-driven object mapper."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, override

from exhaustive_mapper.omit import OmitProperty

from .protocol import ContextT, InputT, Mapper, MapperFunction, OutputT


if TYPE_CHECKING:
    from collections.abc import Iterable

    from exhaustive_mapper.schema import Schema


class ObjectMapper(Mapper[InputT, OutputT, ContextT]):
    """Convert one kind of object into another with a :class:`Schema`.

    Example::

        mapper = ObjectMapper(
            Schema(
                {
                    "full_name": lambda user: f"{user['first_name']} {user['last_name']}",
                    "email": "email",
                },
                output=UserDto,
            )
        )
        dto = mapper.map(user)
    """

    def __init__(self, schema: Schema | Mapping[str, Any]) -> None:
        super().__init__(schema)
        if self._schema.is_async:
            msg = "schema contains coroutine transforms; use AsyncObjectMapper"
            raise TypeError(msg)

    @override
    def map(self, source: InputT | None, context: ContextT | None = None) -> OutputT | None:
        """Map ``source`` field by field, in schema declaration order.

        Field references are copied even when their value is ``None``.
        Transforms returning ``OmitProperty`` leave their field out.
        """
        self._schema.require_context(context)
        if source is None:
            return None

        values: dict[str, Any] = {}
        for name, rule in self._schema.rules:
            value = rule.resolve(source, context)
            if value is not OmitProperty:
                values[name] = value
        return self._schema.build(values)

    @override
    def array(self, source: Iterable[InputT] | None, context: ContextT | None = None) -> list[OutputT] | None:
        """Map each item of ``source`` into a new list, keeping order."""
        self._schema.require_context(context)
        if source is None:
            return None
        return [self.map(item, context) for item in source]

    @override
    def to_function(self) -> MapperFunction:
        def mapper_function(source: InputT | None, context: ContextT | None = None, /) -> OutputT | None:
            return self.map(source, context)

        mapper_function.schema = self._schema  # type: ignore[attr-defined]
        return mapper_function  # type: ignore[return-value]
