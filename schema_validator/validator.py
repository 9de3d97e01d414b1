"""
Validator facade: binds a schema (or a type to derive one from) and runs
validation passes over values.
"""

from __future__ import annotations

import dataclasses
import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

from .config import get_max_depth, is_fail_fast
from .data import new_accessor
from .errors import SchemaError, ValidationResult
from .schema import Context, ErrorSink, Schema, StopValidation
from .tags import ParseConfig, parse_type

if TYPE_CHECKING:
    from .rules.registry import Registry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Validator:
    """
    Validate values against one schema.

    Usage:
        v = Validator(Signup)                        # derive from a dataclass / pydantic model
        v = Validator(Object(name=Field().required()))

        result = v.validate(data)
        if not result.is_valid():
            for err in result:
                print(err.path, err.code)

        signup = v.check(data)                       # raises ValidationErrors

    A Validator holds no per-pass state and can be reused for any number
    of values.
    """

    def __init__(
        self,
        schema_or_type: Schema | type,
        *,
        registry: Registry | None = None,
        config: ParseConfig | None = None,
        fail_fast: bool | None = None,
    ):
        if registry is not None:
            config = dataclasses.replace(config or ParseConfig(), registry=registry)
        self.config = config
        self.registry = registry
        self.fail_fast = fail_fast

        if isinstance(schema_or_type, Schema):
            self.schema = schema_or_type
            if registry is not None:
                self.schema.with_registry(registry)
        elif isinstance(schema_or_type, type):
            self.schema = parse_type(schema_or_type, config)
        else:
            raise SchemaError(
                f"Validator expects a Schema or a type, got {type(schema_or_type).__name__}"
            )

    def validate(self, value: Any) -> ValidationResult:
        """Run one pass and collect every failure (or the first, in fail-fast mode)."""
        fail_fast = self.fail_fast if self.fail_fast is not None else is_fail_fast()
        sink = ErrorSink(fail_fast=fail_fast)
        ctx = Context(self.schema, new_accessor(value), sink=sink, max_depth=get_max_depth())

        try:
            self.schema.validate(ctx)
        except StopValidation:
            pass

        result = ValidationResult(sink.errors)
        logger.debug(
            "Validated %s: %d error(s)", type(value).__name__, len(result)
        )
        return result

    def check(self, value: T) -> T:
        """Return ``value`` unchanged if valid, else raise ``ValidationErrors``."""
        self.validate(value).raise_if_errors()
        return value

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).is_valid()

    def __repr__(self) -> str:
        return f"Validator({self.schema!r})"


@lru_cache(maxsize=128)
def _validator_for(tp: type) -> Validator:
    return Validator(tp)


def validate(value: Any, schema: Schema | type | None = None) -> ValidationResult:
    """
    Validate ``value`` once.

    Without a schema, one is derived from the value's own type (which must
    be a dataclass or pydantic model); validators built this way are cached.
    """
    if isinstance(schema, Schema):
        return Validator(schema).validate(value)
    return _validator_for(schema if schema is not None else type(value)).validate(value)
