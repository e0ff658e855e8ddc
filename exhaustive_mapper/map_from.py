"""Ready-made transforms for common schema rules.

Use them as rule values::

    Schema(
        {
            "kind": map_from.constant("user"),
            "password": map_from.omit,
            "deleted_at": map_from.null,
            "email": map_from.field("email"),
            **map_from.pick("first_name", "last_name"),
        }
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from exhaustive_mapper.omit import OmitProperty
from exhaustive_mapper.schema.rules import FieldReference


if TYPE_CHECKING:
    from collections.abc import Callable


_V = TypeVar("_V")


def constant(value: _V) -> Callable[[], _V]:
    """Return a transform that always produces ``value``."""

    def constant_transform() -> _V:
        return value

    return constant_transform


def omit() -> Any:
    """Always leave the field out of the output."""
    return OmitProperty


def null() -> None:
    """Always map the field to ``None``."""
    return


# Python has no "undefined" distinct from None.
undefined = null


def field(name: str) -> Callable[[Any], Any]:
    """Return a transform copying the input field ``name``, like a plain field reference."""
    reference = FieldReference(name)

    def field_transform(source: Any) -> Any:
        return reference.resolve(source, None)

    field_transform.__qualname__ = f"field({name!r})"
    return field_transform


def pick(*names: str) -> dict[str, str]:
    """Return rules copying each named input field to the same output field."""
    return {name: name for name in names}
