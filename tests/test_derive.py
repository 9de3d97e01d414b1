"""Tests for deriving schemas from dataclasses and pydantic models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Optional

import pytest
from pydantic import BaseModel, Field

from schema_validator import ParseConfig, Registry, Validator, parse_type
from schema_validator.errors import SchemaError
from schema_validator.schema import ArraySchema, FieldSchema, ObjectSchema


@dataclass
class Address:
    city: str = field(default="", metadata={"validate": "required"})
    zip_code: str = field(default="", metadata={"json": "zip", "validate": "len=4"})


@dataclass
class Timestamps:
    created: Optional[datetime] = None
    updated_by: str = field(default="", metadata={"validate": "required"})


@dataclass
class Person:
    name: str = field(default="", metadata={"validate": "required|min_length=2"})
    _stamps: Timestamps = field(default_factory=Timestamps, metadata={"embed": True})
    address: Optional[Address] = None
    emails: list[str] = field(default_factory=list, metadata={"validate": "min_items=1|dive|email"})
    nickname: Optional[str] = None
    internal: str = field(default="", metadata={"validate": "-"})
    settings: dict = field(default_factory=dict)


@dataclass
class Grid:
    rows: list[list[int]] = field(default_factory=list, metadata={"validate": "dive|max_items=2|dive|min=0"})


@dataclass
class Node:
    value: int = 0
    children: list["Node"] = field(default_factory=list)


@dataclass
class BadDive:
    name: str = field(default="", metadata={"validate": "dive|required"})


@dataclass
class UnknownRule:
    name: str = field(default="", metadata={"validate": "no_such_rule"})


@dataclass
class Contact:
    phone: str = field(default="", metadata={"validate": "omitempty|e164"})
    level: Annotated[int, "meta"] = field(default=0, metadata={"validate": "between=0,10"})


class Customer(BaseModel):
    full_name: str = Field("", alias="fullName", json_schema_extra={"validate": "required"})
    tags: list[str] = Field(default_factory=list, json_schema_extra={"validate": "max_items=2"})
    note: Optional[str] = None


class TestParseType:
    """Test the structure of derived schemas."""

    def test_fields_and_kinds(self):
        schema = parse_type(Person)
        assert isinstance(schema, ObjectSchema)
        assert set(schema.fields()) == {
            "name",
            "address",
            "emails",
            "nickname",
            "settings",
            "created",
            "updated_by",
        }
        assert isinstance(schema.get_field("address"), ObjectSchema)
        assert isinstance(schema.get_field("emails"), ArraySchema)
        assert isinstance(schema.get_field("created"), FieldSchema)
        assert isinstance(schema.get_field("settings"), ObjectSchema)

    def test_excluded_field(self):
        assert parse_type(Person).get_field("internal") is None

    def test_optional_types(self):
        schema = parse_type(Person)
        assert schema.get_field("nickname").is_optional
        assert schema.get_field("address").is_optional
        assert not schema.get_field("name").is_optional

    def test_dive_splits_rules(self):
        emails = parse_type(Person).get_field("emails")
        assert [r.name for r in emails.rules] == ["min_items"]
        assert [r.name for r in emails.element.rules] == ["email"]

    def test_nested_dive(self):
        rows = parse_type(Grid).get_field("rows")
        assert rows.rules == []
        assert [r.name for r in rows.element.rules] == ["max_items"]
        assert [r.name for r in rows.element.element.rules] == ["min"]

    def test_external_names_are_remapped(self):
        address = parse_type(Person).get_field("address")
        assert "zip" in address.fields()
        assert "zip_code" not in address.fields()

    def test_omitempty_makes_field_optional(self):
        assert parse_type(Contact).get_field("phone").is_optional

    def test_annotated_is_unwrapped(self):
        level = parse_type(Contact).get_field("level")
        assert isinstance(level, FieldSchema)
        assert level.rules[0].params == (0, 10)

    def test_pydantic_model(self):
        schema = parse_type(Customer)
        assert set(schema.fields()) == {"fullName", "tags", "note"}
        assert [r.name for r in schema.get_field("fullName").rules] == ["required"]

    def test_cached_but_copied(self):
        first = parse_type(Person)
        first.remove_field("name")
        first.get_field("nickname").required()
        assert "name" in parse_type(Person).fields()
        assert parse_type(Person).get_field("nickname").rules == []

    def test_recursive_type(self):
        with pytest.raises(SchemaError, match="Recursive"):
            parse_type(Node)

    def test_dive_on_scalar(self):
        with pytest.raises(SchemaError):
            parse_type(BadDive)

    def test_unknown_rule(self):
        with pytest.raises(SchemaError, match="no_such_rule"):
            parse_type(UnknownRule)

    def test_not_a_struct(self):
        with pytest.raises(SchemaError):
            parse_type(dict)

    def test_custom_registry(self):
        registry = Registry()
        registry.register("no_such_rule", lambda ctx: True)
        schema = parse_type(UnknownRule, ParseConfig(registry=registry))
        assert [r.name for r in schema.get_field("name").rules] == ["no_such_rule"]


class TestValidateDerived:
    """Test validating values against derived schemas."""

    def _person(self, **overrides):
        values = dict(
            name="Ada",
            _stamps=Timestamps(updated_by="admin"),
            address=Address(city="Oslo", zip_code="0150"),
            emails=["ada@example.com"],
        )
        values.update(overrides)
        return Person(**values)

    def test_valid(self):
        assert Validator(Person).validate(self._person()).is_valid()

    def test_embedded_fields_report_without_prefix(self):
        result = Validator(Person).validate(self._person(_stamps=Timestamps()))
        assert [(e.path, e.code) for e in result] == [("updated_by", "required")]

    def test_external_name_in_path(self):
        result = Validator(Person).validate(self._person(address=Address(city="Oslo", zip_code="1")))
        assert [(e.path, e.code) for e in result] == [("address.zip", "len")]

    def test_optional_nested_struct(self):
        assert Validator(Person).validate(self._person(address=None)).is_valid()

    def test_element_paths(self):
        result = Validator(Person).validate(self._person(emails=["ok@example.com", "broken"]))
        assert [(e.path, e.code) for e in result] == [("emails[1]", "email")]

    def test_dict_input_against_derived_schema(self):
        data = {
            "name": "Ada",
            "updated_by": "admin",
            "address": {"city": "Oslo", "zip": "0150"},
            "emails": ["ada@example.com"],
        }
        assert Validator(Person).validate(data).is_valid()

    def test_omitempty_skips_remaining_rules(self):
        assert Validator(Contact).validate(Contact(phone="")).is_valid()
        result = Validator(Contact).validate(Contact(phone="12345"))
        assert [(e.path, e.code) for e in result] == [("phone", "e164")]

    def test_pydantic_values(self):
        result = Validator(Customer).validate(Customer(fullName="", tags=["a", "b", "c"]))
        assert sorted((e.path, e.code) for e in result) == [("fullName", "required"), ("tags", "max_items")]
