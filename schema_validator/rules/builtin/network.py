"""
Network rules: IP addresses and networks, MAC addresses, host names, ports.
"""

from __future__ import annotations

import ipaddress
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...schema.context import Context


def _network_rule(code: str, check):
    def rule(ctx: Context):
        value = ctx.value()
        if value.is_nil():
            return None
        if check(value.to_str()):
            return None
        return ctx.fail(code, actual=value.to_str())

    rule.__name__ = code
    return rule


def _address(text: str, version: int | None = None) -> bool:
    try:
        parsed = ipaddress.ip_address(text)
    except ValueError:
        return False
    return version is None or parsed.version == version


def _network(text: str, version: int | None = None) -> bool:
    if "/" not in text:
        return False
    try:
        parsed = ipaddress.ip_network(text, strict=False)
    except ValueError:
        return False
    return version is None or parsed.version == version


_MAC = re.compile(
    r"^(?:[0-9A-Fa-f]{2}([:-]))(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$"
    r"|^(?:[0-9A-Fa-f]{4}\.){2}[0-9A-Fa-f]{4}$"
)
_LABEL = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")


def is_hostname(text: str) -> bool:
    """RFC 1123 host name: dot-separated labels, total length at most 253."""
    name = text[:-1] if text.endswith(".") else text
    if not name or len(name) > 253:
        return False
    return all(_LABEL.match(label) for label in name.split("."))


def is_fqdn(text: str) -> bool:
    """A host name with at least two labels and an alphabetic top-level label."""
    name = text[:-1] if text.endswith(".") else text
    if not is_hostname(name) or "." not in name:
        return False
    tld = name.rsplit(".", 1)[1]
    return tld.isalpha() and len(tld) >= 2


ip = _network_rule("ip", _address)
ipv4 = _network_rule("ipv4", lambda s: _address(s, 4))
ipv6 = _network_rule("ipv6", lambda s: _address(s, 6))
cidr = _network_rule("cidr", _network)
cidrv4 = _network_rule("cidrv4", lambda s: _network(s, 4))
cidrv6 = _network_rule("cidrv6", lambda s: _network(s, 6))
mac = _network_rule("mac", lambda s: bool(_MAC.match(s)))
hostname = _network_rule("hostname", is_hostname)
fqdn = _network_rule("fqdn", is_fqdn)
domain = _network_rule("domain", is_fqdn)


def port(ctx: Context):
    """Integer in 1..65535; numeric strings are accepted."""
    value = ctx.value()
    if value.is_nil():
        return None
    number = value.to_int(default=None)
    if number is not None and 1 <= number <= 65535:
        return None
    return ctx.fail("port", actual=value.raw())


RULES = {
    "ip": ip,
    "ipv4": ipv4,
    "ipv6": ipv6,
    "cidr": cidr,
    "cidrv4": cidrv4,
    "cidrv6": cidrv6,
    "mac": mac,
    "hostname": hostname,
    "fqdn": fqdn,
    "domain": domain,
    "port": port,
}
