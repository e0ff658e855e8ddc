"""Schemas, compiled mapping rules and shape introspection."""

from .rules import FieldReference, Rule, Transform, compile_rule
from .schema import Schema
from .shape import Shape, shape_of


__all__ = ["FieldReference", "Rule", "Schema", "Shape", "Transform", "compile_rule", "shape_of"]
