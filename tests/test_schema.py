"""Tests for schema nodes, merging and the validation walk."""

import json

import pytest

from schema_validator import Array, Field, Object, Validator
from schema_validator.errors import SchemaError
from schema_validator.schema import ArraySchema, FieldSchema, ObjectSchema


def codes(result):
    return [(err.path, err.code) for err in result]


class TestFieldSchema:
    """Test scalar validation."""

    def test_rules_run_in_order_and_stop_at_first_failure(self):
        schema = Object(name=Field().required().add_validator("min_length", 3))
        result = Validator(schema).validate({"name": ""})
        assert codes(result) == [("name", "required")]

    def test_optional_nil_skips_every_rule(self):
        schema = Object(nick=Field().add_validator("min_length", 3).optional())
        assert Validator(schema).validate({"nick": None}).is_valid()
        assert Validator(schema).validate({}).is_valid()

    def test_optional_removes_required(self):
        field = Field().required().optional()
        assert not field.has_rule("required")
        assert field.is_optional

    def test_required_goes_first(self):
        field = Field().add_validator("email").required()
        assert [r.name for r in field.rules] == ["required", "email"]

    def test_missing_field_is_nil(self):
        schema = Object(name=Field().required())
        assert codes(Validator(schema).validate({})) == [("name", "required")]

    def test_remove_rule(self):
        field = Field("required", "email").remove_rule("email")
        assert [r.name for r in field.rules] == ["required"]

    def test_factory_with_rule_names(self):
        assert [r.name for r in Field("required", "email").rules] == ["required", "email"]


class TestArraySchema:
    """Test sequence validation."""

    def test_min_items_single_error_at_array_path(self):
        schema = Object(items=Array(Field().required()).min_items(1))
        result = Validator(schema).validate({"items": []})
        assert len(result) == 1
        err = result.first_error()
        assert (err.path, err.code) == ("items", "min_items")
        assert dict(err.details) == {"min": 1, "actual": 0}

    def test_max_items(self):
        schema = Object(tags=Array().max_items(2))
        result = Validator(schema).validate({"tags": ["a", "b", "c"]})
        assert codes(result) == [("tags", "max_items")]
        assert result.first_error().details["actual"] == 3

    def test_element_errors_are_independent(self):
        schema = Object(emails=Array(Field().add_validator("email")))
        result = Validator(schema).validate({"emails": ["a@b.io", "nope", "x@y.org", "bad"]})
        assert codes(result) == [("emails[1]", "email"), ("emails[3]", "email")]

    def test_array_rules_stop_elements(self):
        schema = Object(items=Array(Field().required()).add_validator("omitempty").min_items(1))
        assert Validator(schema).validate({"items": []}).is_valid()

    def test_not_a_sequence(self):
        schema = Object(items=Array())
        result = Validator(schema).validate({"items": 5})
        assert codes(result) == [("items", "type")]
        assert result.first_error().details == {"expected": "array", "actual": "int"}

    def test_nil_array_without_rules_is_valid(self):
        schema = Object(items=Array(Field().required()))
        assert Validator(schema).validate({"items": None}).is_valid()

    def test_nested_arrays(self):
        schema = Object(grid=Array(Array(Field().add_validator("min", 0))))
        result = Validator(schema).validate({"grid": [[1, 2], [3, -1]]})
        assert codes(result) == [("grid[1][1]", "min")]


class TestObjectSchema:
    """Test object validation."""

    def test_sibling_errors_are_all_reported(self):
        schema = Object(a=Field().required(), b=Field().required(), c=Field().required())
        result = Validator(schema).validate({"b": "x"})
        assert sorted(codes(result)) == [("a", "required"), ("c", "required")]

    def test_nested_paths(self):
        schema = Object(
            user=Object(address=Object(city=Field().required())),
        )
        result = Validator(schema).validate({"user": {"address": {"city": ""}}})
        assert codes(result) == [("user.address.city", "required")]

    def test_not_an_object(self):
        schema = Object(user=Object(name=Field()))
        result = Validator(schema).validate({"user": "ada"})
        assert codes(result) == [("user", "type")]

    def test_field_name_remap(self):
        schema = Object(email=Field().required()).field_name("email", "email_address")
        assert Validator(schema).validate({"email_address": "a@b.io"}).is_valid()
        # Falls back to the field's own name
        assert Validator(schema).validate({"email": "a@b.io"}).is_valid()
        assert not Validator(schema).validate({}).is_valid()

    def test_strict_reports_unknown_fields(self):
        schema = Object(name=Field()).strict()
        result = Validator(schema).validate({"name": "a", "extra": 1})
        assert codes(result) == [("extra", "unknown_field")]

    def test_object_rules_run_before_fields(self):
        schema = Object(name=Field().required()).required()
        result = Validator(schema).validate({})
        assert codes(result) == [("", "required"), ("name", "required")]

    def test_get_and_remove_field(self):
        schema = Object(a=Field(), b=Field())
        assert isinstance(schema.get_field("a"), FieldSchema)
        schema.remove_field("a")
        assert schema.fields() == ["b"]

    def test_dict_fields_for_non_identifier_names(self):
        schema = Object({"first-name": Field().required()})
        assert codes(Validator(schema).validate({})) == [("first-name", "required")]


class TestMerge:
    """Test schema merging."""

    def test_field_rules_append(self):
        merged = Field().required().merge(Field().add_validator("email"))
        assert [r.name for r in merged.rules] == ["required", "email"]

    def test_merge_does_not_mutate_inputs(self):
        left = Field().required()
        right = Field().add_validator("email")
        left.merge(right)
        assert [r.name for r in left.rules] == ["required"]
        assert [r.name for r in right.rules] == ["email"]

    def test_explicit_optional_wins(self):
        merged = Field().required().merge(FieldSchema(optional=True))
        assert merged.is_optional
        assert Field().optional().merge(Field()).is_optional

    def test_required_merge_goes_first_and_drops_omitempty(self):
        base = Field().add_validator("omitempty").add_validator("min_length", 3).optional()
        merged = base.merge(Field().required())
        assert [r.name for r in merged.rules] == ["required", "min_length"]
        assert not merged.is_optional
        assert [r.name for r in base.rules] == ["omitempty", "min_length"]

    def test_required_method_drops_omitempty(self):
        schema = Field().add_validator("omitempty").add_validator("email").required()
        assert [r.name for r in schema.rules] == ["required", "email"]

    def test_array_elements_merge(self):
        left = Array(Field().required())
        right = Array(Field().add_validator("email")).min_items(1)
        merged = left.merge(right)
        assert isinstance(merged, ArraySchema)
        assert [r.name for r in merged.element.rules] == ["required", "email"]
        assert [r.name for r in merged.rules] == ["min_items"]

    def test_object_fields_union(self):
        left = Object(a=Field().required())
        right = Object(a=Field().add_validator("email"), b=Field()).field_name("b", "bee")
        merged = left.merge(right)
        assert merged.fields() == ["a", "b"]
        assert [r.name for r in merged.get_field("a").rules] == ["required", "email"]
        assert left.fields() == ["a"]
        assert [r.name for r in left.get_field("a").rules] == ["required"]

    def test_add_field_merges_existing(self):
        schema = Object(a=Field().required())
        schema.add_field("a", Field().add_validator("email"))
        assert [r.name for r in schema.get_field("a").rules] == ["required", "email"]

    def test_kind_mismatch(self):
        with pytest.raises(SchemaError):
            Field().merge(Array())
        with pytest.raises(SchemaError):
            Object(a=Field()).add_field("a", Object())


class TestDescription:
    """Test to_dict / to_json."""

    def test_to_dict(self):
        schema = Object(
            name=Field().required().add_validator("max_length", 10),
            tags=Array(Field()).min_items(1),
        )
        assert schema.to_dict() == {
            "type": "object",
            "strict": False,
            "fields": {
                "name": {
                    "type": "field",
                    "validators": [{"name": "required"}, {"name": "max_length", "params": [10]}],
                },
                "tags": {
                    "type": "array",
                    "validators": [{"name": "min_items", "params": [1]}],
                    "element": {"type": "field"},
                },
            },
        }

    def test_to_json(self):
        schema = Object(name=Field().optional())
        assert json.loads(schema.to_json())["fields"]["name"] == {"type": "field", "optional": True}

    def test_copy_is_independent(self):
        schema = Object(a=Field())
        clone = schema.copy()
        clone.add_field("b", Field())
        assert schema.fields() == ["a"]
        assert isinstance(clone, ObjectSchema)

    def test_copy_tree_copies_children(self):
        schema = Object(a=Field(), items=Array(Object(b=Field())))
        clone = schema.copy_tree()
        clone.get_field("a").required()
        clone.get_field("items").element.get_field("b").add_validator("email")
        assert schema.get_field("a").rules == []
        assert schema.get_field("items").element.get_field("b").rules == []
        assert [r.name for r in clone.get_field("a").rules] == ["required"]
