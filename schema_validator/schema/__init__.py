from .array import ArraySchema
from .base import Schema, SchemaModifier
from .builder import Array, Field, Object
from .context import Context, ErrorSink, StopValidation
from .field import FieldSchema
from .object import ObjectSchema

__all__ = [
    "Schema",
    "SchemaModifier",
    "FieldSchema",
    "ArraySchema",
    "ObjectSchema",
    "Context",
    "ErrorSink",
    "StopValidation",
    "Field",
    "Array",
    "Object",
]
