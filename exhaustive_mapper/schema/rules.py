"""Compiled per-field mapping rules."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, override

from exhaustive_mapper.errors import SchemaShapeError


_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def call_shape(func: Callable[..., Any]) -> tuple[int, bool]:
    """Return how many of ``(input, context)`` ``func`` takes, and whether the context is optional.

    The context is optional when the second positional parameter has a
    default, so a ``None`` context is left for that default to fill.
    Callables whose signature cannot be introspected, such as ``str`` or
    ``int``, are treated the same way.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 2, True

    positional: list[inspect.Parameter] = []
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2, False
        if parameter.kind in _POSITIONAL_KINDS:
            positional.append(parameter)

    arity = min(len(positional), 2)
    optional_context = arity == 2 and positional[1].default is not inspect.Parameter.empty
    return arity, optional_context


class Rule(ABC):
    """A single output field's rule."""

    __slots__ = ()

    is_async: bool = False

    @abstractmethod
    def resolve(self, source: Any, context: Any) -> Any:
        """Return the field value, or ``OmitProperty`` to leave it out."""

    @property
    @abstractmethod
    def declared(self) -> Any:
        """The value this rule was declared with in a rules mapping."""


class FieldReference(Rule):
    """Copy a named field of the input verbatim."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        super().__init__()
        if not name:
            msg = "field reference name must not be empty"
            raise SchemaShapeError(msg)
        self.name = name

    @override
    def resolve(self, source: Any, context: Any) -> Any:
        if isinstance(source, Mapping):
            return source.get(self.name)
        return getattr(source, self.name)

    @property
    @override
    def declared(self) -> str:
        return self.name

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldReference):
            return NotImplemented
        return self.name == other.name

    @override
    def __hash__(self) -> int:
        return hash((FieldReference, self.name))

    @override
    def __repr__(self) -> str:
        return f"FieldReference({self.name!r})"


class Transform(Rule):
    """Compute a field from the whole input and the context.

    The callable's positional arity is read once here, so ``lambda item: ...``
    and ``lambda item, context: ...`` are both accepted. A second parameter
    with a default, as in ``lambda item, i=i: ...``, and builtins like
    ``str`` only receive the context when one is given.
    """

    __slots__ = ("_call", "func", "is_async")

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__()
        if not callable(func):
            msg = f"transform must be callable, got {type(func).__name__}"
            raise SchemaShapeError(msg)
        self.func = func
        self.is_async = inspect.iscoroutinefunction(func)

        arity, optional_context = call_shape(func)
        if arity == 0:
            self._call: Callable[[Any, Any], Any] = lambda _source, _context: func()
        elif arity == 1:
            self._call = lambda source, _context: func(source)
        elif optional_context:
            self._call = lambda source, context: func(source) if context is None else func(source, context)
        else:
            self._call = func

    @override
    def resolve(self, source: Any, context: Any) -> Any:
        return self._call(source, context)

    @property
    @override
    def declared(self) -> Callable[..., Any]:
        return self.func

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return self.func is other.func

    @override
    def __hash__(self) -> int:
        return hash((Transform, id(self.func)))

    @override
    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"Transform({name})"


def compile_rule(field_name: str, declaration: Any) -> Rule:
    """Turn a rule declaration into a :class:`FieldReference` or :class:`Transform`."""
    if isinstance(declaration, Rule):
        return declaration
    if isinstance(declaration, str):
        return FieldReference(declaration)
    if callable(declaration):
        return Transform(declaration)
    msg = f"rule for field {field_name!r} must be a field name or a callable, got {type(declaration).__name__}"
    raise SchemaShapeError(msg)
