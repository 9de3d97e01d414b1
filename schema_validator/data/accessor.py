"""
Accessor base class and the ``new_accessor`` dispatcher.

An accessor is a read-only view over a runtime value. The concrete class is
chosen once, when the value is wrapped, from the value's shape.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from .path import parse_path

if TYPE_CHECKING:
    from .value import Value


class Kind(Enum):
    VALUE = auto()
    ARRAY = auto()
    OBJECT = auto()


class Accessor(ABC):
    """Uniform traversal contract over objects, arrays and scalars."""

    kind: Kind

    @abstractmethod
    def raw(self) -> Any:
        """The wrapped value, unchanged."""

    @abstractmethod
    def get_field(self, name: str) -> Accessor:
        """Step into one path segment (a field name or an ``[N]`` token)."""

    def is_nil(self) -> bool:
        return self.raw() is None

    def get_value(self, path: str = "") -> Value:
        """
        Resolve a dot/bracket path to a terminal Value.

        Raises:
            UnknownFieldError: A field segment does not exist
            IndexOutOfRangeError: An index segment is out of range
            InvalidPathError: The path or an index token is malformed
        """
        from .value import Value

        accessor: Accessor = self
        for segment in parse_path(path):
            accessor = accessor.get_field(segment.value)

        if isinstance(accessor, Value):
            return accessor
        return Value(accessor.raw())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.raw()!r})"


def is_struct(value: Any) -> bool:
    """True for dataclass and pydantic model instances."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (Sequence, set, frozenset)) and not isinstance(
        value, (str, bytes, bytearray)
    )


def new_accessor(value: Any) -> Accessor:
    """
    Wrap a value in the accessor matching its shape.

    Conversion rules:
        Accessor -> pass through
        None / str / bytes / numbers / other scalars -> Value
        Mapping -> MapAccessor
        dataclass or pydantic model instance -> StructAccessor
        list / tuple / other sequences / sets -> ArrayAccessor
    """
    from .array import ArrayAccessor
    from .object import MapAccessor, StructAccessor
    from .value import Value

    if isinstance(value, Accessor):
        return value
    if value is None:
        return Value(None)
    if isinstance(value, Mapping):
        return MapAccessor(value)
    if is_struct(value):
        return StructAccessor(value)
    if is_sequence(value):
        return ArrayAccessor(value)
    return Value(value)
