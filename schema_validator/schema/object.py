from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, cast

from ..data import Accessor, ObjectAccessor, Value
from ..errors import UnknownFieldError
from .base import Schema, SchemaModifier

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


class ObjectSchema(Schema):
    """
    Validates an object (struct or mapping) field by field.

    Holds a name -> schema map, an optional name -> source field remap (for
    external names that differ from the attribute being read), object-level
    rules for cross-field checks, and a strict flag that reports undeclared
    keys.
    """

    kind = "object"

    def __init__(
        self,
        fields: dict[str, Schema] | None = None,
        rules=None,
        *,
        field_names: dict[str, str] | None = None,
        strict: bool = False,
        optional=None,
        registry=None,
    ):
        super().__init__(rules, optional=optional, registry=registry)
        self._fields: dict[str, Schema] = {}
        self._field_names: dict[str, str] = dict(field_names or {})
        self._strict = strict
        for name, schema in (fields or {}).items():
            self.add_field(name, schema)

    # Field map

    def add_field(self, name: str, schema: Schema) -> ObjectSchema:
        """Add a field; an existing field of the same name is merged, not replaced."""
        existing = self._fields.get(name)
        if existing is None:
            self._fields[name] = schema
        else:
            logger.debug("Merging schema for existing field %r", name)
            self._fields[name] = existing.merge(schema)
        return self

    def remove_field(self, name: str) -> ObjectSchema:
        self._fields.pop(name, None)
        self._field_names.pop(name, None)
        return self

    def field_name(self, name: str, source: str) -> ObjectSchema:
        """Read field ``name`` from attribute/key ``source``."""
        self._field_names[name] = source
        return self

    def get_field(self, name: str) -> Schema | None:
        return self._fields.get(name)

    def fields(self) -> list[str]:
        return list(self._fields)

    def items(self) -> Iterator[tuple[str, Schema]]:
        return iter(list(self._fields.items()))

    def strict(self, enabled: bool = True) -> ObjectSchema:
        self._strict = enabled
        return self

    @property
    def is_strict(self) -> bool:
        return self._strict

    # Validation

    def validate(self, ctx: Context) -> None:
        accessor = ctx.accessor
        if self.is_optional and accessor.is_nil():
            return

        modifiers = list(_schema_modifiers(accessor))
        if modifiers:
            working = self.copy_tree()
            ctx = ctx.rebind(working)
            for modifier in modifiers:
                logger.debug(
                    "Applying schema modifier %s at %r", type(modifier).__name__, ctx.path
                )
                modifier.modify_schema(ctx)
            working._validate_node(ctx)
        else:
            self._validate_node(ctx)

    def _validate_node(self, ctx: Context) -> None:
        self.run_rules(ctx)

        accessor = ctx.accessor
        if ctx.skipped or accessor.is_nil():
            return

        if not isinstance(accessor, ObjectAccessor):
            ctx.add_error(
                ctx.fail("type", expected="object", actual=type(accessor.raw()).__name__)
            )
            return

        for name, field_schema in self.items():
            field_accessor = self._resolve(accessor, name)
            field_ctx = ctx.with_child(name, field_schema, field_accessor)
            field_schema.validate(field_ctx)

        if self._strict:
            self._report_unknown(ctx, accessor)

    def _resolve(self, accessor: ObjectAccessor, name: str) -> Accessor:
        source = self._field_names.get(name, name)
        candidates = [source] if source == name else [source, name]
        for candidate in candidates:
            try:
                return accessor.get_field(candidate)
            except UnknownFieldError:
                continue
        # Missing fields validate as nil
        return Value(None)

    def _report_unknown(self, ctx: Context, accessor: ObjectAccessor) -> None:
        known = set(self._fields) | set(self._field_names.values())
        for key in accessor.fields():
            if key not in known:
                child = ctx.with_child(key, self, accessor.get_field(key))
                ctx.add_error(child.fail("unknown_field"))

    # Copy / merge

    def copy(self) -> ObjectSchema:
        clone = ObjectSchema(
            rules=list(self.rules),
            field_names=dict(self._field_names),
            strict=self._strict,
            optional=self._optional,
            registry=self._registry,
        )
        clone._fields = dict(self._fields)
        return clone

    def copy_tree(self) -> ObjectSchema:
        clone = self.copy()
        clone._fields = {name: schema.copy_tree() for name, schema in self._fields.items()}
        return clone

    def _merge_into(self, merged: Schema, other: Schema) -> None:
        merged = cast(ObjectSchema, merged)
        other = cast(ObjectSchema, other)
        for name, schema in other._fields.items():
            merged.add_field(name, schema)
        merged._field_names.update(other._field_names)
        merged._strict = self._strict or other._strict

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["strict"] = self._strict
        if self._fields:
            result["fields"] = {name: schema.to_dict() for name, schema in self._fields.items()}
        return result


def _schema_modifiers(accessor: Accessor) -> Iterator[SchemaModifier]:
    """The value itself first, then embedded structs, if they are modifiers."""
    if accessor.is_nil():
        return
    raw = accessor.raw()
    if isinstance(raw, SchemaModifier):
        yield raw
    if isinstance(accessor, ObjectAccessor):
        for inner in accessor.embedded():
            if isinstance(inner, SchemaModifier):
                yield inner
