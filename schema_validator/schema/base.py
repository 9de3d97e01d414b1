"""
Schema base class, the SchemaModifier capability, and schema merging.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..errors import SchemaError

if TYPE_CHECKING:
    from ..rules.registry import Registry, Rule
    from .context import Context


@runtime_checkable
class SchemaModifier(Protocol):
    """
    Lets a value adjust its own object schema before it is validated.

    ``ctx.schema`` is a working copy of the current ObjectSchema node, scoped
    to this validation pass; ``ctx.accessor`` reads the current object.
    Only the current node may be changed.

    Usage:
        @dataclass
        class DynamicForm:
            required: bool
            value: str

            def modify_schema(self, ctx):
                if ctx.get_value("required").to_bool():
                    ctx.object_schema().add_field("value", Field().required())
    """

    def modify_schema(self, ctx: Context) -> None: ...


class Schema(ABC):
    """
    A node of the constraint tree.

    Every node carries an ordered rule list and an optional flag.
    The flag is tri-state: None means "not specified" and behaves like
    False, but lets an explicit setting win when schemas are merged.
    """

    kind: str = "schema"

    def __init__(
        self,
        rules: list[Rule] | None = None,
        *,
        optional: bool | None = None,
        registry: Registry | None = None,
    ):
        self.rules: list[Rule] = list(rules or [])
        self._optional = optional
        self._registry = registry

    @abstractmethod
    def validate(self, ctx: Context) -> None:
        """Validate the context's value, sending failures to its error sink."""

    @abstractmethod
    def copy(self) -> Schema:
        """Copy this node; children are shared, containers are not."""

    def copy_tree(self) -> Schema:
        """Copy this node and every node below it."""
        return self.copy()

    @abstractmethod
    def _merge_into(self, merged: Schema, other: Schema) -> None:
        """Combine kind-specific parts of ``other`` into ``merged``."""

    @property
    def is_optional(self) -> bool:
        return bool(self._optional)

    @property
    def registry(self) -> Registry:
        if self._registry is None:
            from ..rules import default_registry

            return default_registry()
        return self._registry

    # Fluent API

    def add_rule(self, rule: Rule) -> Schema:
        self.rules.append(rule)
        return self

    def add_validator(self, name: str, *params: Any) -> Schema:
        """Build a rule through the registry and append it."""
        return self.add_rule(self.registry.new_rule(name, *params))

    def remove_validator(self, name: str) -> Schema:
        self.rules = [r for r in self.rules if r.name != name]
        return self

    remove_rule = remove_validator

    def required(self) -> Schema:
        """Non-nil and non-empty; ``required`` runs first and ``omitempty`` is dropped."""
        self._optional = False
        self.remove_validator("omitempty")
        if not self.has_rule("required"):
            self.rules.insert(0, self.registry.new_rule("required"))
        return self

    def optional(self) -> Schema:
        """Nil values pass without running any rule."""
        self._optional = True
        return self.remove_validator("required")

    def has_rule(self, name: str) -> bool:
        return any(r.name == name for r in self.rules)

    def with_registry(self, registry: Registry) -> Schema:
        self._registry = registry
        return self

    # Validation helpers

    def run_rules(self, ctx: Context) -> bool:
        """Run rules in order; stop at the first failure. True if none failed."""
        for rule in self.rules:
            if ctx.skipped:
                break
            err = rule.validate(ctx)
            if err is not None:
                ctx.add_error(err)
                return False
        return True

    # Merging

    def merge(self, other: Schema) -> Schema:
        """
        Combine two schemas of the same kind into a new one.

        Rules are appended; an explicit ``optional`` on ``other`` wins. When
        ``other`` is explicitly required, ``required`` moves to the front and
        ``omitempty`` is dropped, as with ``required()``.
        Neither input is modified.
        """
        if type(self) is not type(other):
            raise SchemaError(
                f"Cannot merge {type(other).__name__} into {type(self).__name__}"
            )
        merged = self.copy()
        merged.rules = [*self.rules, *other.rules]
        if other._optional is not None:
            merged._optional = other._optional
        if other._optional is False and other.has_rule("required"):
            first = next(r for r in other.rules if r.name == "required")
            merged.rules = [first] + [
                r for r in merged.rules if r.name not in ("required", "omitempty")
            ]
        self._merge_into(merged, other)
        return merged

    # Description

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.kind}
        if self.is_optional:
            result["optional"] = True
        if self.rules:
            result["validators"] = [rule.to_dict() for rule in self.rules]
        return result

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def __repr__(self) -> str:
        names = ", ".join(r.name for r in self.rules)
        return f"{type(self).__name__}([{names}])"
