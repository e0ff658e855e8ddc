"""Omission sentinel returned by transforms to drop an output field."""

from __future__ import annotations

from typing import Any, Final, Self


class _OmitPropertyType:
    """Type of the :data:`OmitProperty` singleton.

    Only one instance ever exists. Copying and pickling hand back that same
    instance so identity checks keep working.
    """

    __slots__ = ()

    _instance: _OmitPropertyType | None = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OmitProperty"

    def __reduce__(self) -> str:
        return "OmitProperty"

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self


OmitProperty: Final = _OmitPropertyType()
"""Return this from a transform to leave its field out of the output.

Use it when ``"field" in output`` must differ from ``output["field"] is None``.
"""
