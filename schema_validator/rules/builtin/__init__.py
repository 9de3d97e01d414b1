"""
Built-in rule catalog.

Rules are registered through the same public API as user rules:

    registry = Registry()
    register_builtins(registry)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import compare, cross_field, format, network, presence, size, string

if TYPE_CHECKING:
    from ..registry import Registry

MODULES = (presence, size, compare, cross_field, string, format, network)


def builtin_rules() -> dict:
    """Name -> check function for every built-in rule."""
    rules: dict = {}
    for module in MODULES:
        rules.update(module.RULES)
    return rules


def register_builtins(registry: Registry) -> Registry:
    for name, fn in builtin_rules().items():
        registry.register(name, fn)
    return registry


__all__ = ["builtin_rules", "register_builtins"]
