"""
Derive schemas from annotated types.

Dataclass fields carry their rules in metadata, pydantic fields in
``json_schema_extra``:

    @dataclass
    class Signup:
        email: str = field(metadata={"validate": "required|email", "json": "email_address"})
        password: str = field(metadata={"validate": "required|min_length=8"})
        confirm: str = field(metadata={"validate": "eqfield=password"})
        tags: list[str] = field(default_factory=list, metadata={"validate": "max_items=5|dive|alpha"})

    class Signup(BaseModel):
        email: str = Field(alias="email_address", json_schema_extra={"validate": "required|email"})

    schema = parse_type(Signup)
"""

from __future__ import annotations

import collections.abc
import logging
import typing
from functools import lru_cache
from typing import Any

from ..data.struct_info import get_struct_info, is_struct_type, unwrap_optional
from ..errors import SchemaError
from ..schema import ArraySchema, FieldSchema, ObjectSchema, Schema
from .parser import ParseConfig, TagRule, split_dive, tag_rules_from

logger = logging.getLogger(__name__)

EXCLUDE = "-"

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

DEFAULT_CONFIG = ParseConfig()


def parse_type(tp: type, config: ParseConfig | None = None) -> ObjectSchema:
    """
    Build an ObjectSchema for a dataclass or pydantic model.

    The result is cached per (type, config); each call returns a fresh copy
    of the whole tree, so changing it does not leak into other callers.

    Raises:
        SchemaError: The type is not a struct, is recursive, or a tag names
                     an unknown rule or carries invalid params
    """
    if not is_struct_type(tp):
        raise SchemaError(f"Cannot derive a schema from {tp!r}: expected a dataclass or pydantic model")
    return _derive(tp, config or DEFAULT_CONFIG).copy_tree()


@lru_cache(maxsize=None)
def _derive(tp: type, config: ParseConfig) -> ObjectSchema:
    schema = _Deriver(config).object_schema(tp, frozenset())
    logger.debug("Derived schema for %s with fields %s", tp.__name__, schema.fields())
    return schema


class _Deriver:
    def __init__(self, config: ParseConfig):
        from ..rules import default_registry

        self.config = config
        self.registry = config.registry or default_registry()
        self.known_rules = frozenset(self.registry.names())

    def object_schema(self, tp: type, building: frozenset[type]) -> ObjectSchema:
        if tp in building:
            raise SchemaError(f"Recursive type {tp.__name__} cannot be turned into a schema")
        building = building | {tp}

        info = get_struct_info(tp, self.config.name_tags)
        schema = ObjectSchema(registry=self.registry)
        for name, field_info in info.fields.items():
            tag = field_info.tags.get(self.config.tag_key)
            if tag == EXCLUDE:
                continue
            rules = tag_rules_from(tag, self.config, self.known_rules)
            try:
                child = self.schema_for(field_info.type_hint, rules, building)
            except SchemaError as e:
                raise SchemaError(f"{tp.__name__}.{field_info.attr}: {e}") from e
            schema.add_field(name, child)
            if not field_info.embedded and name != field_info.attr:
                schema.field_name(name, field_info.attr)
        return schema

    def schema_for(self, hint: Any, rules: list[TagRule], building: frozenset[type]) -> Schema:
        tp, optional = unwrap_optional(hint)
        origin = typing.get_origin(tp) or tp
        array_rules, element_rules = split_dive(rules, self.config.dive_tag)

        if self._is_sequence(tp, origin):
            element = self.schema_for(self._element_type(tp, origin), element_rules or [], building)
            schema: Schema = ArraySchema(element, registry=self.registry)
        else:
            if element_rules is not None:
                raise SchemaError(f"'{self.config.dive_tag}' used on non-sequence type {tp!r}")
            if self._is_value_type(tp):
                schema = FieldSchema(registry=self.registry)
            elif is_struct_type(tp):
                schema = self.object_schema(tp, building)
            elif isinstance(origin, type) and issubclass(origin, _MAPPING_ORIGINS):
                schema = ObjectSchema(registry=self.registry)
            else:
                schema = FieldSchema(registry=self.registry)

        for rule in array_rules:
            schema.add_rule(self.registry.new_rule(rule.name, *rule.params))

        if (optional or schema.has_rule("omitempty")) and not schema.has_rule("required"):
            schema.optional()
        return schema

    def _is_value_type(self, tp: Any) -> bool:
        return isinstance(tp, type) and issubclass(tp, self.config.value_types)

    @staticmethod
    def _is_sequence(tp: Any, origin: Any) -> bool:
        if not isinstance(origin, type) or origin in (str, bytes, bytearray):
            return False
        return issubclass(origin, _SEQUENCE_ORIGINS)

    @staticmethod
    def _element_type(tp: Any, origin: Any) -> Any:
        args = typing.get_args(tp)
        if not args:
            return Any
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return args[0]
            # Heterogeneous tuples validate their elements as plain values
            return Any
        return args[0]
