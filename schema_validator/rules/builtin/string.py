"""
String content rules. Each one reads the value's string form and passes on nil.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from ...errors import SchemaError

if TYPE_CHECKING:
    from ...schema.context import Context


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SchemaError(f"Invalid regular expression {pattern!r}: {e}") from e


def _text_rule(code: str, check):
    def rule(ctx: Context):
        value = ctx.value()
        if value.is_nil():
            return None
        return check(value.to_str())

    rule.__name__ = code
    return rule


_ALPHA = re.compile(r"^[A-Za-z]+$")
_ALPHANUM = re.compile(r"^[A-Za-z0-9]+$")
_NUMERIC = re.compile(r"^[-+]?[0-9]+(?:\.[0-9]+)?$")

alpha = _text_rule("alpha", lambda s: bool(_ALPHA.match(s)))
alphanum = _text_rule("alphanum", lambda s: bool(_ALPHANUM.match(s)))
numeric = _text_rule("numeric", lambda s: bool(_NUMERIC.match(s)))
ascii_ = _text_rule("ascii", str.isascii)
lowercase = _text_rule("lowercase", lambda s: s == s.lower())
uppercase = _text_rule("uppercase", lambda s: s == s.upper())


def contains(ctx: Context, sub: str):
    value = ctx.value()
    if value.is_nil() or sub in value.to_str():
        return None
    return ctx.fail("contains", sub, substring=sub)


def excludes(ctx: Context, sub: str):
    value = ctx.value()
    if value.is_nil() or sub not in value.to_str():
        return None
    return ctx.fail("excludes", sub, substring=sub)


def startswith(ctx: Context, prefix: str):
    value = ctx.value()
    if value.is_nil() or value.to_str().startswith(prefix):
        return None
    return ctx.fail("startswith", prefix, prefix=prefix)


def endswith(ctx: Context, suffix: str):
    value = ctx.value()
    if value.is_nil() or value.to_str().endswith(suffix):
        return None
    return ctx.fail("endswith", suffix, suffix=suffix)


def pattern(ctx: Context, regex: str):
    """Full match against ``regex``."""
    compiled = compile_pattern(regex)
    value = ctx.value()
    if value.is_nil() or compiled.fullmatch(value.to_str()):
        return None
    return ctx.fail("pattern", regex, pattern=regex)


RULES = {
    "alpha": alpha,
    "alphanum": alphanum,
    "numeric": numeric,
    "ascii": ascii_,
    "lowercase": lowercase,
    "uppercase": uppercase,
    "contains": contains,
    "excludes": excludes,
    "startswith": startswith,
    "endswith": endswith,
    "pattern": pattern,
}
