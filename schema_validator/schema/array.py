from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from ..data import ArrayAccessor
from .base import Schema

if TYPE_CHECKING:
    from .context import Context


class ArraySchema(Schema):
    """
    Validates a sequence: array-level rules first, then every element
    against the shared element schema.
    """

    kind = "array"

    def __init__(self, element: Schema, rules=None, *, optional=None, registry=None):
        super().__init__(rules, optional=optional, registry=registry)
        self.element = element

    def validate(self, ctx: Context) -> None:
        accessor = ctx.accessor
        if self.is_optional and accessor.is_nil():
            return

        self.run_rules(ctx)
        if ctx.skipped or accessor.is_nil():
            return

        if not isinstance(accessor, ArrayAccessor):
            ctx.add_error(
                ctx.fail("type", expected="array", actual=type(accessor.raw()).__name__)
            )
            return

        for idx, elem in accessor.iterate():
            elem_ctx = ctx.with_child(f"[{idx}]", self.element, elem)
            self.element.validate(elem_ctx)

    def min_items(self, n: int) -> ArraySchema:
        self.add_validator("min_items", n)
        return self

    def max_items(self, n: int) -> ArraySchema:
        self.add_validator("max_items", n)
        return self

    def copy(self) -> ArraySchema:
        return ArraySchema(
            self.element,
            list(self.rules),
            optional=self._optional,
            registry=self._registry,
        )

    def copy_tree(self) -> ArraySchema:
        clone = self.copy()
        clone.element = self.element.copy_tree()
        return clone

    def _merge_into(self, merged: Schema, other: Schema) -> None:
        merged = cast(ArraySchema, merged)
        merged.element = self.element.merge(cast(ArraySchema, other).element)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["element"] = self.element.to_dict()
        return result
