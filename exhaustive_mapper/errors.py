"""Exceptions raised by schemas and mappers.

Exceptions raised by transforms are never wrapped; they reach the caller
unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable


class MapperError(Exception):
    """Base class for errors raised by exhaustive-mapper itself."""


class SchemaShapeError(MapperError, ValueError):
    """Schema rules do not exactly cover the declared shape."""

    def __init__(self, message: str, *, missing: Iterable[str] = (), unexpected: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.missing = frozenset(missing)
        self.unexpected = frozenset(unexpected)


class MissingContextError(MapperError, TypeError):
    """A schema that requires a context was called without one."""
