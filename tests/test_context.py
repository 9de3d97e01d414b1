"""Tests for the validation context."""

import pytest

from schema_validator import Field, Object
from schema_validator.data import new_accessor
from schema_validator.errors import MaxDepthExceededError, NoParentError, ValidationError
from schema_validator.schema import Context, ErrorSink, StopValidation


@pytest.fixture
def root():
    return Context(Object(), new_accessor({"user": {"name": "Ada", "tags": ["a", "b"]}}))


class TestPaths:
    """Test path tracking through child contexts."""

    def test_root_path_is_empty(self, root):
        assert root.path == ""
        assert root.depth == 0
        assert root.parent is None

    def test_child_paths(self, root):
        user = root.with_child("user", Field(), root.accessor.get_field("user"))
        tags = user.with_child("tags", Field(), user.accessor.get_field("tags"))
        tag = tags.with_child("[1]", Field(), tags.accessor.get_field("[1]"))
        assert tag.path == "user.tags[1]"
        assert tag.depth == 3
        assert tag.root is root
        assert tag.value().raw() == "b"

    def test_children_share_the_sink(self, root):
        child = root.with_child("user", Field(), root.accessor.get_field("user"))
        child.add_error(child.fail("required"))
        assert root.errors == [ValidationError(path="user", code="required")]

    def test_depth_guard(self):
        ctx = Context(Field(), new_accessor(None), max_depth=1)
        child = ctx.with_child("a", Field(), new_accessor(None))
        with pytest.raises(MaxDepthExceededError) as exc_info:
            child.with_child("b", Field(), new_accessor(None))
        assert exc_info.value.path == "a.b"


class TestLookups:
    """Test value and parent lookups."""

    def test_get_value(self, root):
        assert root.get_value("user.name").raw() == "Ada"

    def test_parent_value(self, root):
        user = root.with_child("user", Field(), root.accessor.get_field("user"))
        name = user.with_child("name", Field(), user.accessor.get_field("name"))
        assert name.parent_value("tags[0]").raw() == "a"

    def test_no_parent_at_root(self, root):
        with pytest.raises(NoParentError):
            root.parent_value("user")

    def test_object_schema(self, root):
        assert root.object_schema() is root.schema
        leaf = Context(Field(), new_accessor("x"))
        with pytest.raises(TypeError):
            leaf.object_schema()


class TestFailAndSkip:
    """Test error construction and early exit."""

    def test_fail(self, root):
        err = root.fail("between", 1, 5, message="out of range", min=1, max=5)
        assert err.path == ""
        assert err.params == (1, 5)
        assert err.details == {"min": 1, "max": 5}
        assert str(err) == "<root>: between [1, 5] (out of range)"

    def test_skip_rest(self, root):
        assert not root.skipped
        root.skip_rest()
        assert root.skipped

    def test_rebind_keeps_position(self, root):
        root.skip_rest()
        other = Object(a=Field())
        rebound = root.rebind(other)
        assert rebound.schema is other
        assert rebound.path == root.path
        assert rebound.skipped
        assert rebound.sink is root.sink

    def test_fail_fast_sink(self):
        sink = ErrorSink(fail_fast=True)
        with pytest.raises(StopValidation):
            sink.add(ValidationError(path="a", code="required"))
        assert len(sink.errors) == 1
