"""
Cached field tables for dataclasses and pydantic models.

A table maps every reachable external name to the attribute path that reads
it. Embedded fields (``embed=True`` in the field metadata) have their own
fields promoted onto the outer struct; outer fields shadow promoted ones.
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

NAME_TAGS = ("json", "param", "query")


@dataclass(frozen=True)
class FieldInfo:
    """One reachable field of a struct type."""

    name: str  # external name
    attr: str  # attribute name on the declaring type
    path: tuple[str, ...]  # attribute path from the outer struct
    type_hint: Any
    tags: Mapping[str, Any] = field(default_factory=dict)
    embedded: bool = False  # reached through an embedded struct

    def get(self, obj: Any) -> Any:
        """Read the value, yielding None if an embedded hop is None."""
        current = obj
        for attr in self.path:
            if current is None:
                return None
            current = getattr(current, attr)
        return current


@dataclass
class StructInfo:
    """Field resolution table for one struct type."""

    type: type
    fields: dict[str, FieldInfo] = field(default_factory=dict)
    attrs: dict[str, str] = field(default_factory=dict)  # attribute name -> external name
    embeds: list[tuple[str, ...]] = field(default_factory=list)  # attribute paths of embedded structs

    def get_field(self, name: str) -> FieldInfo | None:
        info = self.fields.get(name)
        if info is None and name in self.attrs:
            info = self.fields.get(self.attrs[name])
        return info

    def field_names(self) -> list[str]:
        return list(self.fields)


@dataclass(frozen=True)
class RawField:
    """A declared field before promotion, independent of the model library."""

    attr: str
    type_hint: Any
    tags: Mapping[str, Any]


def is_struct_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    if issubclass(tp, BaseModel):
        return True
    return dataclasses.is_dataclass(tp)


def declared_fields(tp: type) -> list[RawField]:
    """Fields declared on a dataclass or pydantic model, in order."""
    if issubclass(tp, BaseModel):
        result = []
        for attr, info in tp.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            tags = dict(extra)
            if info.alias and "json" not in tags:
                tags["json"] = info.alias
            hint = info.annotation
            if info.metadata:
                hint = typing.Annotated[(hint, *info.metadata)]
            result.append(RawField(attr, hint, tags))
        return result

    hints = typing.get_type_hints(tp, include_extras=True)
    return [
        RawField(f.name, hints.get(f.name, Any), dict(f.metadata))
        for f in dataclasses.fields(tp)
    ]


def external_name(raw: RawField, name_tags: tuple[str, ...] = NAME_TAGS) -> str:
    """Resolve the external name: json -> param -> query -> attribute name."""
    for tag in name_tags:
        value = raw.tags.get(tag)
        if isinstance(value, str) and value and value != "-":
            return value.split(",", 1)[0]
    return raw.attr


def is_private(attr: str) -> bool:
    return attr.startswith("_")


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Strip Annotated and Optional wrappers; report whether None was allowed."""
    optional = False
    while True:
        origin = typing.get_origin(tp)
        if origin is typing.Annotated:
            tp = typing.get_args(tp)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = [a for a in typing.get_args(tp) if a is not type(None)]
            if len(args) < len(typing.get_args(tp)):
                optional = True
            if len(args) == 1:
                tp = args[0]
                continue
        return tp, optional


def _walk(
    tp: type,
    prefix: tuple[str, ...],
    info: StructInfo,
    name_tags: tuple[str, ...],
    seen: frozenset[type],
) -> None:
    embedded_later: list[tuple[RawField, type]] = []

    for raw in declared_fields(tp):
        if raw.tags.get("embed"):
            inner, _ = unwrap_optional(raw.type_hint)
            if is_struct_type(inner) and inner not in seen:
                embedded_later.append((raw, inner))
                continue

        # Non-embedded private fields are not part of the struct's surface
        if is_private(raw.attr):
            continue

        name = external_name(raw, name_tags)
        if name in info.fields:
            continue

        info.fields[name] = FieldInfo(
            name=name,
            attr=raw.attr,
            path=(*prefix, raw.attr),
            type_hint=raw.type_hint,
            tags=raw.tags,
            embedded=bool(prefix),
        )
        info.attrs.setdefault(raw.attr, name)

    # Promote embedded fields after every outer field is known, so outer wins
    for raw, inner in embedded_later:
        path = (*prefix, raw.attr)
        info.embeds.append(path)
        _walk(inner, path, info, name_tags, seen | {inner})


@lru_cache(maxsize=None)
def get_struct_info(tp: type, name_tags: tuple[str, ...] = NAME_TAGS) -> StructInfo:
    """Return the cached field table for a struct type, building it once."""
    info = StructInfo(type=tp)
    _walk(tp, (), info, name_tags, frozenset({tp}))
    logger.debug("Built struct info for %s: %s", tp.__name__, info.field_names())
    return info


__all__ = [
    "FieldInfo",
    "StructInfo",
    "RawField",
    "NAME_TAGS",
    "declared_fields",
    "external_name",
    "get_struct_info",
    "is_private",
    "is_struct_type",
    "unwrap_optional",
]
