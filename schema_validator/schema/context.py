"""
Validation context threaded through the recursive schema walk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import get_max_depth
from ..data import Accessor, Value, render_path
from ..errors import MaxDepthExceededError, NoParentError, ValidationError

if TYPE_CHECKING:
    from .base import Schema
    from .object import ObjectSchema


class StopValidation(Exception):
    """Internal signal: the error sink is full (fail-fast mode)."""


class ErrorSink:
    """Shared, append-only error list for one validation pass."""

    def __init__(self, fail_fast: bool = False):
        self.fail_fast = fail_fast
        self.errors: list[ValidationError] = []

    def add(self, err: ValidationError) -> None:
        self.errors.append(err)
        if self.fail_fast:
            raise StopValidation


class Context:
    """
    One traversal step: schema node, accessor, path, parent and error sink.

    A root context is created per ``Validator.validate`` call; every step
    into a field or element creates a child with ``with_child``. Children
    share the sink and point back to their parent.
    """

    def __init__(
        self,
        schema: Schema,
        accessor: Accessor,
        *,
        parent: Context | None = None,
        segments: tuple[str, ...] = (),
        sink: ErrorSink | None = None,
        max_depth: int | None = None,
    ):
        self.schema = schema
        self.accessor = accessor
        self.parent = parent
        self.segments = segments
        self.sink = sink if sink is not None else ErrorSink()
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        self._skip_rest = False

    @property
    def path(self) -> str:
        return render_path(self.segments)

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def root(self) -> Context:
        ctx = self
        while ctx.parent is not None:
            ctx = ctx.parent
        return ctx

    def with_child(self, segment: str, schema: Schema, accessor: Accessor) -> Context:
        segments = (*self.segments, segment)
        if len(segments) > self.max_depth:
            raise MaxDepthExceededError(render_path(segments), self.max_depth)
        return Context(
            schema,
            accessor,
            parent=self,
            segments=segments,
            sink=self.sink,
            max_depth=self.max_depth,
        )

    def rebind(self, schema: Schema) -> Context:
        """Same position in the walk, different schema node."""
        ctx = Context(
            schema,
            self.accessor,
            parent=self.parent,
            segments=self.segments,
            sink=self.sink,
            max_depth=self.max_depth,
        )
        ctx._skip_rest = self._skip_rest
        return ctx

    def value(self) -> Value:
        return self.accessor.get_value("")

    def get_value(self, path: str) -> Value:
        return self.accessor.get_value(path)

    def parent_value(self, path: str) -> Value:
        """Look up a sibling through the parent; used by cross-field rules."""
        if self.parent is None:
            raise NoParentError(f"No parent context at '{self.path or '<root>'}' to resolve '{path}'")
        return self.parent.get_value(path)

    def object_schema(self) -> ObjectSchema:
        """The current node as an ObjectSchema (for schema modifiers)."""
        from .object import ObjectSchema

        if not isinstance(self.schema, ObjectSchema):
            raise TypeError(f"Current schema is {type(self.schema).__name__}, not ObjectSchema")
        return self.schema

    def skip_rest(self) -> None:
        """Skip the remaining rules (and children) of the current node."""
        self._skip_rest = True

    @property
    def skipped(self) -> bool:
        return self._skip_rest

    def fail(self, code: str, *params: Any, message: str | None = None, **details: Any) -> ValidationError:
        """Build a ValidationError at the current path."""
        return ValidationError(
            path=self.path,
            code=code,
            params=params,
            details=details,
            message=message,
        )

    def add_error(self, err: ValidationError) -> None:
        self.sink.add(err)

    @property
    def errors(self) -> list[ValidationError]:
        return list(self.sink.errors)

    def __repr__(self) -> str:
        return f"Context(path={self.path!r}, schema={type(self.schema).__name__})"
