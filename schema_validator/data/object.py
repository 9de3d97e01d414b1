"""
Object accessors: dataclass / pydantic structs and mappings.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Iterator

from ..errors import UnknownFieldError
from .accessor import Accessor, Kind, new_accessor
from .struct_info import StructInfo, get_struct_info


class ObjectAccessor(Accessor):
    """Shared surface of struct and mapping accessors."""

    kind = Kind.OBJECT

    @abstractmethod
    def fields(self) -> list[str]:
        """Names this object can be read by."""

    @abstractmethod
    def has_field(self, name: str) -> bool:
        """True if ``get_field(name)`` would succeed."""

    def __len__(self) -> int:
        return len(self.fields())

    def embedded(self) -> Iterator[Any]:
        """Raw values of embedded structs, outermost first."""
        return iter(())


class StructAccessor(ObjectAccessor):
    """
    View over a dataclass or pydantic model instance.

    Fields are found by external name (json/param/query metadata, pydantic
    alias) or by attribute name, including fields promoted from embedded
    structs.
    """

    def __init__(self, value: Any):
        self._value = value
        self._info: StructInfo = get_struct_info(type(value))

    def raw(self) -> Any:
        return self._value

    def get_field(self, name: str) -> Accessor:
        info = self._info.get_field(name)
        if info is None:
            raise UnknownFieldError(name, type(self._value).__name__)
        return new_accessor(info.get(self._value))

    def has_field(self, name: str) -> bool:
        return self._info.get_field(name) is not None

    def fields(self) -> list[str]:
        return self._info.field_names()

    def embedded(self) -> Iterator[Any]:
        for path in self._info.embeds:
            current = self._value
            for attr in path:
                if current is None:
                    break
                current = getattr(current, attr)
            if current is not None:
                yield current


class MapAccessor(ObjectAccessor):
    """View over a mapping; keys are looked up as given, then by str()."""

    def __init__(self, value: Mapping):
        self._value = value

    def raw(self) -> Any:
        return self._value

    def _key_for(self, name: str) -> Any:
        if name in self._value:
            return name
        for key in self._value:
            if str(key) == name:
                return key
        raise UnknownFieldError(name, "mapping")

    def get_field(self, name: str) -> Accessor:
        return new_accessor(self._value[self._key_for(name)])

    def has_field(self, name: str) -> bool:
        try:
            self._key_for(name)
        except UnknownFieldError:
            return False
        return True

    def fields(self) -> list[str]:
        return [str(key) for key in self._value]
