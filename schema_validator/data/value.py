"""
Terminal accessor for scalars, with typed coercions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sized

from ..errors import CoercionError, InvalidPathError
from .accessor import Accessor, Kind

_MISSING: Any = object()

_TRUE_STRINGS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "false", "FALSE", "False"})


class Value(Accessor):
    """
    Scalar (or nil) view.

    Each ``to_*`` coercion raises ``CoercionError`` when the underlying value
    cannot convert. Passing ``default=`` returns the default instead.

    Usage:
        Value("42").to_int()             # 42
        Value("abc").to_int()            # CoercionError
        Value("abc").to_int(default=0)   # 0
    """

    kind = Kind.VALUE

    __slots__ = ("_raw",)

    def __init__(self, raw: Any):
        self._raw = raw

    def raw(self) -> Any:
        return self._raw

    def get_field(self, name: str) -> Accessor:
        # A nil value absorbs further traversal so optional chains stay nil
        if self._raw is None:
            return self
        raise InvalidPathError(
            f"Cannot traverse '{name}' on scalar {type(self._raw).__name__}"
        )

    # Kind checks

    def is_bool(self) -> bool:
        return isinstance(self._raw, bool)

    def is_int(self) -> bool:
        return isinstance(self._raw, int) and not isinstance(self._raw, bool)

    def is_float(self) -> bool:
        return isinstance(self._raw, (float, Decimal))

    def is_number(self) -> bool:
        return self.is_int() or self.is_float()

    def is_string(self) -> bool:
        return isinstance(self._raw, str)

    def has_length(self) -> bool:
        return isinstance(self._raw, Sized)

    # Coercions

    def to_str(self) -> str:
        """String form; never fails. Nil renders as the empty string."""
        raw = self._raw
        if raw is None:
            return ""
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, bytes):
            return raw.decode("utf-8", errors="replace")
        if isinstance(raw, float) and raw.is_integer():
            return str(int(raw))
        return str(raw)

    def to_int(self, default: Any = _MISSING) -> int:
        raw = self._raw
        try:
            if isinstance(raw, bool) or raw is None:
                raise TypeError(f"cannot convert {type(raw).__name__} to int")
            if isinstance(raw, int):
                return raw
            if isinstance(raw, (float, Decimal)):
                return int(raw)
            if isinstance(raw, str):
                return int(raw.strip(), 10)
            raise TypeError(f"cannot convert {type(raw).__name__} to int")
        except (TypeError, ValueError) as e:
            if default is not _MISSING:
                return default
            raise CoercionError(f"Cannot convert {raw!r} to int: {e}") from e

    def to_float(self, default: Any = _MISSING) -> float:
        raw = self._raw
        try:
            if isinstance(raw, bool) or raw is None:
                raise TypeError(f"cannot convert {type(raw).__name__} to float")
            if isinstance(raw, (int, float, Decimal)):
                return float(raw)
            if isinstance(raw, str):
                return float(raw.strip())
            raise TypeError(f"cannot convert {type(raw).__name__} to float")
        except (TypeError, ValueError) as e:
            if default is not _MISSING:
                return default
            raise CoercionError(f"Cannot convert {raw!r} to float: {e}") from e

    def to_bool(self, default: Any = _MISSING) -> bool:
        raw = self._raw
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        if default is not _MISSING:
            return default
        raise CoercionError(f"Cannot convert {raw!r} to bool")

    def length(self, default: Any = _MISSING) -> int:
        """len() of strings and collections."""
        if isinstance(self._raw, Sized):
            return len(self._raw)
        if default is not _MISSING:
            return default
        raise CoercionError(f"Value of type {type(self._raw).__name__} has no length")

    def is_empty(self) -> bool:
        """None, blank strings and empty collections are empty; 0 and False are not."""
        raw = self._raw
        if raw is None:
            return True
        if isinstance(raw, str):
            return raw.strip() == ""
        if isinstance(raw, Sized):
            return len(raw) == 0
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Value", repr(self._raw)))
