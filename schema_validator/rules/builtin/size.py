"""
Size rules. ``min``/``max``/``len``/``between`` compare numbers by value and
strings or collections by length; the ``*_length`` and ``*_items`` variants
only look at length.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .common import measure

if TYPE_CHECKING:
    from ...schema.context import Context


def min_(ctx: Context, n: int | float):
    actual = measure(ctx.value())
    if actual is not None and actual < n:
        return ctx.fail("min", n, min=n, actual=actual)
    return None


def max_(ctx: Context, n: int | float):
    actual = measure(ctx.value())
    if actual is not None and actual > n:
        return ctx.fail("max", n, max=n, actual=actual)
    return None


def len_(ctx: Context, n: int):
    actual = measure(ctx.value())
    if actual is not None and actual != n:
        return ctx.fail("len", n, len=n, actual=actual)
    return None


def between(ctx: Context, low: int | float, high: int | float):
    actual = measure(ctx.value())
    if actual is not None and not low <= actual <= high:
        return ctx.fail("between", low, high, min=low, max=high, actual=actual)
    return None


def _length(ctx: Context) -> int | None:
    value = ctx.value()
    if value.is_nil() or not value.has_length():
        return None
    return value.length()


def min_length(ctx: Context, n: int):
    actual = _length(ctx)
    if actual is not None and actual < n:
        return ctx.fail("min_length", n, min=n, actual=actual)
    return None


def max_length(ctx: Context, n: int):
    actual = _length(ctx)
    if actual is not None and actual > n:
        return ctx.fail("max_length", n, max=n, actual=actual)
    return None


def min_items(ctx: Context, n: int):
    actual = _length(ctx)
    if actual is not None and actual < n:
        return ctx.fail("min_items", n, min=n, actual=actual)
    return None


def max_items(ctx: Context, n: int):
    actual = _length(ctx)
    if actual is not None and actual > n:
        return ctx.fail("max_items", n, max=n, actual=actual)
    return None


RULES = {
    "min": min_,
    "max": max_,
    "len": len_,
    "between": between,
    "min_length": min_length,
    "max_length": max_length,
    "min_items": min_items,
    "max_items": max_items,
}
