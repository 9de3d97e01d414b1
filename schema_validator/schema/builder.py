"""
Factory functions for code-defined schemas.

Usage:
    from schema_validator import Array, Field, Object

    schema = Object(
        name=Field().required().add_validator("min_length", 2),
        email=Field().optional().add_validator("email"),
        tags=Array(Field().add_validator("alpha")).max_items(5),
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .array import ArraySchema
from .base import Schema
from .field import FieldSchema
from .object import ObjectSchema

if TYPE_CHECKING:
    from ..rules.registry import Registry


def Field(*rules: str, registry: Registry | None = None) -> FieldSchema:
    """
    Create a field schema, optionally with rule names that take no params.

    Usage:
        Field()                      # no rules
        Field("required", "email")   # same as Field().required().add_validator("email")
    """
    schema = FieldSchema(registry=registry)
    for name in rules:
        schema.add_validator(name)
    return schema


def Array(element: Schema | None = None, *, registry: Registry | None = None) -> ArraySchema:
    """Create an array schema; the element schema defaults to an empty Field()."""
    return ArraySchema(element if element is not None else FieldSchema(registry=registry), registry=registry)


def Object(fields: dict[str, Schema] | None = None, *, registry: Registry | None = None, **named: Schema) -> ObjectSchema:
    """
    Create an object schema.

    Fields can be given as a dict (for names that are not identifiers) or as
    keyword arguments.
    """
    schema = ObjectSchema(registry=registry)
    for name, child in {**(fields or {}), **named}.items():
        schema.add_field(name, child)
    return schema
