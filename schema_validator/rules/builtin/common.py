"""
Helpers shared by the built-in rules.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from ...data import Value
from ...errors import NoParentError

if TYPE_CHECKING:
    from ...schema.context import Context


Number = int | float


def measure(value: Value) -> Number | None:
    """Numbers measure as themselves, strings and collections by length."""
    if value.is_number():
        raw = value.raw()
        return float(raw) if isinstance(raw, Decimal) else raw
    if value.has_length():
        return value.length()
    return None


def sibling(ctx: Context, name: str) -> Value | None:
    """Sibling field value, or None when there is no parent to look in."""
    try:
        return ctx.parent_value(name)
    except NoParentError:
        return None


def no_parent(ctx: Context, code: str, name: str):
    return ctx.fail(code, name, message=f"no parent object to read '{name}' from", field=name)


def ordered(left: Value, right: Value) -> tuple[Any, Any]:
    """
    Make two values comparable: numerically when both parse as numbers,
    as they are when they share a comparable type, else by string form.
    """
    lf = left.to_float(default=None)
    rf = right.to_float(default=None)
    if lf is not None and rf is not None:
        return lf, rf
    a, b = left.raw(), right.raw()
    if type(a) is type(b) and a is not None:
        try:
            a < b
        except TypeError:
            pass
        else:
            return a, b
    return left.to_str(), right.to_str()
