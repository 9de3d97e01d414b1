"""
Cross-field rules: compare the current value with a sibling field of the
enclosing object. At the root there is no sibling to read, which is
reported as a failure of the rule itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .common import no_parent, ordered, sibling

if TYPE_CHECKING:
    from ...schema.context import Context


def _field_rule(code: str, check):
    def rule(ctx: Context, field: str):
        value = ctx.value()
        if value.is_nil():
            return None
        other = sibling(ctx, field)
        if other is None:
            return no_parent(ctx, code, field)
        if check(value, other):
            return None
        return ctx.fail(code, field, field=field)

    rule.__name__ = code
    rule.__doc__ = f"Cross-field comparison ``{code}`` against a sibling field."
    return rule


def _compare(op):
    def check(value, other):
        if other.is_nil():
            return False
        left, right = ordered(value, other)
        return op(left, right)

    return check


eqfield = _field_rule("eqfield", lambda v, o: v.to_str() == o.to_str())
nefield = _field_rule("nefield", lambda v, o: v.to_str() != o.to_str())
gtfield = _field_rule("gtfield", _compare(lambda a, b: a > b))
gtefield = _field_rule("gtefield", _compare(lambda a, b: a >= b))
ltfield = _field_rule("ltfield", _compare(lambda a, b: a < b))
ltefield = _field_rule("ltefield", _compare(lambda a, b: a <= b))


RULES = {
    "eqfield": eqfield,
    "nefield": nefield,
    "gtfield": gtfield,
    "gtefield": gtefield,
    "ltfield": ltfield,
    "ltefield": ltefield,
}
