"""Mapper contracts and implementations."""

from .async_object_mapper import AsyncObjectMapper
from .blocking import BlockingObjectMapper
from .object_mapper import ObjectMapper
from .protocol import Mapper, MapperFunction


__all__ = ["AsyncObjectMapper", "BlockingObjectMapper", "Mapper", "MapperFunction", "ObjectMapper"]
