"""
Format rules: well-known string encodings and identifiers. Nil passes;
an empty string is not a valid instance of any of these formats.
"""

from __future__ import annotations

import base64
import binascii
import json as jsonlib
import re
import uuid as uuidlib
from datetime import datetime as dt
from typing import TYPE_CHECKING
from urllib.parse import urlparse

if TYPE_CHECKING:
    from ...schema.context import Context


def _format_rule(code: str, check):
    def rule(ctx: Context):
        value = ctx.value()
        if value.is_nil():
            return None
        if check(value.to_str()):
            return None
        return ctx.fail(code, actual=value.to_str())

    rule.__name__ = code
    return rule


_EMAIL = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")
_HEX = re.compile(r"^(?:0[xX])?[0-9a-fA-F]+$")
_HEXCOLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_SEMVER = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_E164 = re.compile(r"^\+[1-9]\d{1,14}$")


def is_url(text: str) -> bool:
    parsed = urlparse(text)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc) and not any(c.isspace() for c in text)


def is_uri(text: str) -> bool:
    parsed = urlparse(text)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path) and not any(c.isspace() for c in text)


def _uuid_version(text: str) -> int | None:
    try:
        parsed = uuidlib.UUID(text)
    except ValueError:
        return None
    if str(parsed) != text.lower():
        return None
    return parsed.version or 0


def _uuid_check(version: int | None):
    def check(text: str) -> bool:
        found = _uuid_version(text)
        if found is None:
            return False
        return version is None or found == version

    return check


def is_json(text: str) -> bool:
    try:
        jsonlib.loads(text)
    except ValueError:
        return False
    return True


def is_base64(text: str) -> bool:
    if not text:
        return False
    try:
        base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def _coordinate(limit: float):
    def check(text: str) -> bool:
        try:
            number = float(text)
        except ValueError:
            return False
        return -limit <= number <= limit

    return check


email = _format_rule("email", lambda s: bool(_EMAIL.match(s)))
url = _format_rule("url", is_url)
uri = _format_rule("uri", is_uri)
uuid = _format_rule("uuid", _uuid_check(None))
uuid3 = _format_rule("uuid3", _uuid_check(3))
uuid4 = _format_rule("uuid4", _uuid_check(4))
uuid5 = _format_rule("uuid5", _uuid_check(5))
json = _format_rule("json", is_json)
hexadecimal = _format_rule("hexadecimal", lambda s: bool(_HEX.match(s)))
hexcolor = _format_rule("hexcolor", lambda s: bool(_HEXCOLOR.match(s)))
base64_ = _format_rule("base64", is_base64)
semver = _format_rule("semver", lambda s: bool(_SEMVER.match(s)))
e164 = _format_rule("e164", lambda s: bool(_E164.match(s)))
latitude = _format_rule("latitude", _coordinate(90))
longitude = _format_rule("longitude", _coordinate(180))


def datetime(ctx: Context, layout: str = "iso"):
    """
    Parse with ``strptime(layout)``; the default accepts ISO 8601.
    Date and datetime objects always pass.
    """
    value = ctx.value()
    if value.is_nil():
        return None
    raw = value.raw()
    if hasattr(raw, "isoformat"):
        return None
    text = value.to_str()
    try:
        if layout == "iso":
            dt.fromisoformat(text)
        else:
            dt.strptime(text, layout)
    except ValueError:
        return ctx.fail("datetime", layout, layout=layout, actual=text)
    return None


RULES = {
    "email": email,
    "url": url,
    "uri": uri,
    "uuid": uuid,
    "uuid3": uuid3,
    "uuid4": uuid4,
    "uuid5": uuid5,
    "json": json,
    "hexadecimal": hexadecimal,
    "hexcolor": hexcolor,
    "base64": base64_,
    "semver": semver,
    "e164": e164,
    "latitude": latitude,
    "longitude": longitude,
    "datetime": datetime,
}
