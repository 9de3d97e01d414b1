from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Schema

if TYPE_CHECKING:
    from .context import Context


class FieldSchema(Schema):
    """Validates a scalar value with an ordered list of rules."""

    kind = "field"

    def validate(self, ctx: Context) -> None:
        if self.is_optional and ctx.accessor.is_nil():
            return
        self.run_rules(ctx)

    def copy(self) -> FieldSchema:
        return FieldSchema(list(self.rules), optional=self._optional, registry=self._registry)

    def _merge_into(self, merged: Schema, other: Schema) -> None:
        pass
