from .builtin import builtin_rules, register_builtins
from .registry import (
    ParamSpec,
    Registry,
    Rule,
    RuleFactory,
    coerce_param,
    default_registry,
    register,
)

__all__ = [
    "Rule",
    "RuleFactory",
    "ParamSpec",
    "Registry",
    "coerce_param",
    "default_registry",
    "register",
    "builtin_rules",
    "register_builtins",
]
