"""
Comparison rules against a literal parameter.

Numbers compare by value. For ``eq``/``ne`` strings compare by content;
for the ordering rules strings and collections compare by length.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...data import Value
from .common import measure

if TYPE_CHECKING:
    from ...schema.context import Context


def _equals(value: Value, expected: str) -> bool:
    if value.is_number():
        target = Value(expected).to_float(default=None)
        return target is not None and float(value.raw()) == target
    if value.is_bool():
        return value.raw() == Value(expected).to_bool(default=None)
    if value.is_string():
        return value.raw() == expected
    if value.has_length():
        return value.length() == Value(expected).to_int(default=None)
    return value.to_str() == expected


def eq(ctx: Context, expected: str):
    value = ctx.value()
    if value.is_nil() or _equals(value, expected):
        return None
    return ctx.fail("eq", expected, expected=expected, actual=value.raw())


def ne(ctx: Context, expected: str):
    value = ctx.value()
    if value.is_nil() or not _equals(value, expected):
        return None
    return ctx.fail("ne", expected, expected=expected)


def _ordering(code: str, check):
    def rule(ctx: Context, n: int | float):
        actual = measure(ctx.value())
        if actual is not None and not check(actual, n):
            return ctx.fail(code, n, limit=n, actual=actual)
        return None

    rule.__name__ = code
    return rule


gt = _ordering("gt", lambda a, n: a > n)
gte = _ordering("gte", lambda a, n: a >= n)
lt = _ordering("lt", lambda a, n: a < n)
lte = _ordering("lte", lambda a, n: a <= n)


def eq_ignore_case(ctx: Context, expected: str):
    value = ctx.value()
    if value.is_nil() or value.to_str().casefold() == expected.casefold():
        return None
    return ctx.fail("eq_ignore_case", expected, expected=expected, actual=value.to_str())


def ne_ignore_case(ctx: Context, expected: str):
    value = ctx.value()
    if value.is_nil() or value.to_str().casefold() != expected.casefold():
        return None
    return ctx.fail("ne_ignore_case", expected, expected=expected)


def oneof(ctx: Context, allowed: list[str]):
    """Value must render as one of ``allowed``; empty values pass."""
    value = ctx.value()
    actual = value.to_str()
    if actual == "" or actual in allowed:
        return None
    return ctx.fail("oneof", *allowed, allowed=list(allowed), actual=actual)


RULES = {
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "gte": gte,
    "lt": lt,
    "lte": lte,
    "eq_ignore_case": eq_ignore_case,
    "ne_ignore_case": ne_ignore_case,
    "oneof": oneof,
}
