"""exhaustive-mapper - schema-driven object mapping with exhaustive field coverage"""

from . import compose, map_from
from ._version import version as __version__
from .errors import MapperError, MissingContextError, SchemaShapeError
from .mappers import AsyncObjectMapper, BlockingObjectMapper, Mapper, MapperFunction, ObjectMapper
from .omit import OmitProperty
from .schema import FieldReference, Schema, Transform


__all__ = [
    "AsyncObjectMapper",
    "BlockingObjectMapper",
    "FieldReference",
    "Mapper",
    "MapperError",
    "MapperFunction",
    "MissingContextError",
    "ObjectMapper",
    "OmitProperty",
    "Schema",
    "SchemaShapeError",
    "Transform",
    "__version__",
    "compose",
    "map_from",
]
