"""
schema_validator: schema-driven validation for dataclasses, pydantic models,
mappings and sequences.
"""

from .config import get_max_depth, is_fail_fast, validation_settings
from .data import Accessor, ArrayAccessor, MapAccessor, ObjectAccessor, StructAccessor, Value, new_accessor
from .errors import (
    AccessorError,
    CoercionError,
    IndexOutOfRangeError,
    InvalidPathError,
    MaxDepthExceededError,
    NoParentError,
    SchemaError,
    SchemaValidatorError,
    UnknownFieldError,
    ValidationError,
    ValidationErrors,
    ValidationResult,
)
from .rules import Registry, Rule, default_registry, register
from .schema import (
    Array,
    ArraySchema,
    Context,
    Field,
    FieldSchema,
    Object,
    ObjectSchema,
    Schema,
    SchemaModifier,
)
from .tags import ParseConfig, TagRule, parse_tag, parse_type
from .validator import Validator, validate

__all__ = [
    # Validation
    "Validator",
    "validate",
    "ValidationResult",
    "ValidationError",
    # Schemas
    "Schema",
    "FieldSchema",
    "ArraySchema",
    "ObjectSchema",
    "SchemaModifier",
    "Context",
    "Field",
    "Array",
    "Object",
    # Rules
    "Registry",
    "Rule",
    "default_registry",
    "register",
    # Tags
    "ParseConfig",
    "TagRule",
    "parse_tag",
    "parse_type",
    # Data access
    "Accessor",
    "ObjectAccessor",
    "StructAccessor",
    "MapAccessor",
    "ArrayAccessor",
    "Value",
    "new_accessor",
    # Config
    "validation_settings",
    "is_fail_fast",
    "get_max_depth",
    # Errors
    "SchemaValidatorError",
    "SchemaError",
    "AccessorError",
    "UnknownFieldError",
    "IndexOutOfRangeError",
    "InvalidPathError",
    "NoParentError",
    "MaxDepthExceededError",
    "CoercionError",
    "ValidationErrors",
]
