"""
Array accessor over lists, tuples and other sequences.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterator

from ..errors import IndexOutOfRangeError
from .accessor import Accessor, Kind, new_accessor
from .path import parse_index


class ArrayAccessor(Accessor):
    kind = Kind.ARRAY

    def __init__(self, value: Any):
        self._value = value
        # Sets have no index order of their own; freeze one for this view
        self._items: Sequence = value if isinstance(value, Sequence) else list(value)

    def raw(self) -> Any:
        return self._value

    def __len__(self) -> int:
        return len(self._items)

    def get_field(self, name: str) -> Accessor:
        """Resolve an ``[N]`` segment."""
        return self.get_index(parse_index(name))

    def get_index(self, idx: int) -> Accessor:
        if idx < 0 or idx >= len(self._items):
            raise IndexOutOfRangeError(idx, len(self._items))
        return new_accessor(self._items[idx])

    def iterate(self) -> Iterator[tuple[int, Accessor]]:
        """Yield ``(index, element accessor)`` pairs in index order."""
        for idx, item in enumerate(self._items):
            yield idx, new_accessor(item)
