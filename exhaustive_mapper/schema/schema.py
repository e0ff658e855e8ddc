"""Immutable, shape-checked mapping schemas."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, override

from exhaustive_mapper.errors import MissingContextError, SchemaShapeError

from .rules import FieldReference, Rule, compile_rule
from .shape import shape_of


if TYPE_CHECKING:
    from .shape import Shape


logger = logging.getLogger(__name__)


def _sorted_names(names: frozenset[str]) -> str:
    return ", ".join(sorted(names))


class Schema(Mapping[str, Any]):
    """Declarative map from each output field to the rule that fills it.

    A rule is either the name of an input field, copied as is, or a
    transform called with ``(input, context)``. Iteration and output key
    order follow the order the rules were declared in.

    Parameters
    ----------
    rules
        Mapping of output field name to rule declaration.
    output
        Output shape. When given, the rules must cover exactly its fields.
    input
        Input shape. When given, every field reference must name one of its
        fields.
    context
        Declared context requirement. ``None`` means no context is needed;
        anything else makes a context mandatory on every mapping call.
    """

    __slots__ = ("_compiled", "_context", "_declared", "_input_shape", "_output_shape")

    def __init__(
        self,
        rules: Mapping[str, Any],
        *,
        output: Any = None,
        input: Any = None,  # noqa: A002
        context: Any = None,
    ) -> None:
        super().__init__()
        self._output_shape = shape_of(output)
        self._input_shape = shape_of(input)
        self._context = context

        compiled = tuple((name, compile_rule(name, declaration)) for name, declaration in rules.items())
        self._check_output_fields(frozenset(name for name, _ in compiled))
        self._check_input_fields(compiled)

        self._compiled = compiled
        self._declared = MappingProxyType({name: rule.declared for name, rule in compiled})
        logger.debug("compiled schema for %s with %d rules", self.output_shape.name, len(compiled))

    def _check_output_fields(self, names: frozenset[str]) -> None:
        expected = self._output_shape.fields
        if expected is None:
            return
        missing = expected - names
        unexpected = names - expected
        if not missing and not unexpected:
            return

        problems: list[str] = []
        if missing:
            problems.append(f"missing rules for {_sorted_names(missing)}")
        if unexpected:
            problems.append(f"unexpected fields {_sorted_names(unexpected)}")
        msg = f"schema does not match {self.output_shape.name}: {'; '.join(problems)}"
        raise SchemaShapeError(msg, missing=missing, unexpected=unexpected)

    def _check_input_fields(self, compiled: tuple[tuple[str, Rule], ...]) -> None:
        available = self._input_shape.fields
        if available is None:
            return
        unknown = frozenset(
            rule.name for _, rule in compiled if isinstance(rule, FieldReference) and rule.name not in available
        )
        if unknown:
            msg = f"field references not present on {self.input_shape.name}: {_sorted_names(unknown)}"
            raise SchemaShapeError(msg, unexpected=unknown)

    @property
    def rules(self) -> tuple[tuple[str, Rule], ...]:
        """Compiled ``(output field, rule)`` pairs in declaration order."""
        return self._compiled

    @property
    def output_shape(self) -> Shape:
        return self._output_shape

    @property
    def input_shape(self) -> Shape:
        return self._input_shape

    @property
    def context(self) -> Any:
        """Declared context requirement, ``None`` when no context is needed."""
        return self._context

    @property
    def requires_context(self) -> bool:
        return self._context is not None

    @property
    def is_async(self) -> bool:
        """True when any transform is a coroutine function."""
        return any(rule.is_async for _, rule in self._compiled)

    def require_context(self, context: Any) -> None:
        """Raise :class:`MissingContextError` if a needed context is absent."""
        if context is None and self._context is not None:
            name = getattr(self._context, "__name__", repr(self._context))
            msg = f"schema for {self.output_shape.name} requires a {name} context"
            raise MissingContextError(msg)

    def build(self, values: dict[str, Any]) -> Any:
        """Turn mapped field values into an output of the output shape."""
        return self._output_shape.build(values)

    def pick(self, *names: str) -> dict[str, Any]:
        """Return the declared rules for ``names`` only."""
        return {name: self._declared[name] for name in names}

    def omit(self, *names: str) -> dict[str, Any]:
        """Return every declared rule except those for ``names``."""
        for name in names:
            if name not in self._declared:
                raise KeyError(name)
        excluded = set(names)
        return {name: rule for name, rule in self._declared.items() if name not in excluded}

    @override
    def __getitem__(self, key: str) -> Any:
        """Return the rule declared for an output field."""
        return self._declared[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._declared)

    @override
    def __len__(self) -> int:
        return len(self._declared)

    @override
    def __eq__(self, other: object) -> bool:
        """Schemas compare by identity; compare ``dict(schema)`` for the declared rules."""
        return self is other

    @override
    def __hash__(self) -> int:
        return object.__hash__(self)

    @override
    def __repr__(self) -> str:
        return f"Schema({self.output_shape.name}: {', '.join(self._declared)})"
