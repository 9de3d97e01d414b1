"""
Presence rules: required, omitempty and the conditional required_* family.

These are the only built-in rules that act on nil values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .common import no_parent, sibling

if TYPE_CHECKING:
    from ...schema.context import Context


def required(ctx: Context):
    """Fails on None, blank strings and empty collections."""
    return not ctx.value().is_empty()


def omitempty(ctx: Context):
    """Skips the remaining rules (and children) of an empty value."""
    if ctx.value().is_empty():
        ctx.skip_rest()
    return None


def required_if(ctx: Context, field: str, expected: str):
    """Required when sibling ``field`` renders as ``expected``."""
    other = sibling(ctx, field)
    if other is None:
        return no_parent(ctx, "required_if", field)
    if other.to_str() == expected and ctx.value().is_empty():
        return ctx.fail("required_if", field, expected, field=field, value=expected)
    return None


def required_with(ctx: Context, *fields: str):
    """Required when any of ``fields`` is present."""
    if not ctx.value().is_empty():
        return None
    for name in fields:
        other = sibling(ctx, name)
        if other is None:
            return no_parent(ctx, "required_with", name)
        if not other.is_empty():
            return ctx.fail("required_with", *fields, field=name)
    return None


def required_without(ctx: Context, *fields: str):
    """Required when any of ``fields`` is missing."""
    if not ctx.value().is_empty():
        return None
    for name in fields:
        other = sibling(ctx, name)
        if other is None:
            return no_parent(ctx, "required_without", name)
        if other.is_empty():
            return ctx.fail("required_without", *fields, field=name)
    return None


RULES = {
    "required": required,
    "omitempty": omitempty,
    "required_if": required_if,
    "required_with": required_with,
    "required_without": required_without,
}
