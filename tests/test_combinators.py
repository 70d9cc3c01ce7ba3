"""
Tests for sigil.combinators: List, Object, Record, Nullable, Union and Json.
"""

from collections import OrderedDict

import pytest

from sigil import (
    Boolean,
    Err,
    Json,
    List,
    Literal,
    Nullable,
    Number,
    Object,
    ObjectType,
    Ok,
    Record,
    String,
    Union,
    schema_context,
)


class TestList:
    def test_valid_list(self):
        assert List(Number).validate([1, 2, 3]) == Ok([1, 2, 3])

    def test_empty_list(self):
        assert List(Number).validate([]) == Ok([])

    def test_items_are_coerced_into_a_new_list(self):
        source = ["1", "2"]
        result = List(Number).validate(source)
        assert result == Ok([1, 2])
        assert result.value is not source
        assert source == ["1", "2"]

    def test_tuple_input(self):
        assert List(String).validate(("a", "b")) == Ok(["a", "b"])

    def test_fails_on_first_invalid_item(self):
        result = List(Number).validate([1, "x", None])
        assert result == Err("'x' is not a number")

    @pytest.mark.parametrize("value", ["abc", {"a": 1}, None, 1])
    def test_non_list_fails(self, value):
        assert isinstance(List(Number).validate(value), Err)

    def test_schema(self):
        assert List(Number).to_json() == {"type": "List", "itemType": "number"}


class TestObject:
    def test_extra_keys_are_dropped(self):
        assert Object({"id": Number}).validate({"id": 1, "extra": True}) == Ok({"id": 1})

    def test_missing_field_fails(self):
        result = Object({"id": Number}).validate({})
        assert result == Err("None is not a number")

    def test_missing_nullable_field_becomes_none(self):
        Todo = Object({"id": Number, "note": Nullable(String)})
        assert Todo.validate({"id": 1}) == Ok({"id": 1, "note": None})

    def test_fields_follow_declaration_order(self):
        Pair = Object({"b": Number, "a": Number})
        result = Pair.validate({"a": 1, "b": 2})
        assert list(result.value) == ["b", "a"]

    def test_fails_on_first_invalid_field(self):
        Todo = Object({"id": Number, "content": String})
        result = Todo.validate({"id": "x", "content": 1})
        assert result == Err("'x' is not a number")

    def test_coerces_fields(self):
        Todo = Object({"id": Number, "completed": Boolean, "content": String})
        result = Todo.validate({"id": "0", "completed": "false", "content": "0"})
        assert result == Ok({"id": 0, "completed": False, "content": "0"})

    def test_nested_objects(self):
        AppState = Object(
            {
                "header": Object({"text": String}),
                "todos": List(Object({"id": Number})),
            }
        )
        data = {"header": {"text": "hi"}, "todos": [{"id": 1}, {"id": 2, "x": 0}]}
        assert AppState.validate(data) == Ok(
            {"header": {"text": "hi"}, "todos": [{"id": 1}, {"id": 2}]}
        )

    def test_accepts_any_mapping(self):
        result = Object({"id": Number}).validate(OrderedDict(id=1))
        assert result == Ok({"id": 1})

    @pytest.mark.parametrize("value", [None, [1], "abc", 1])
    def test_non_mapping_fails(self, value):
        assert isinstance(Object({"id": Number}).validate(value), Err)

    def test_non_descriptor_field_raises(self):
        with pytest.raises(TypeError):
            Object({"id": int})  # type: ignore[dict-item]

    def test_exposes_fields(self):
        Todo = Object({"id": Number})
        assert isinstance(Todo, ObjectType)
        assert Todo.fields == {"id": Number}

    def test_schema(self):
        Todo = Object({"id": Number, "content": String})
        assert Todo.to_json() == {
            "type": "Object",
            "fields": [
                {"key": "id", "type": "number"},
                {"key": "content", "type": "string"},
            ],
        }


class TestRecord:
    def test_keeps_all_keys(self):
        result = Record(Number).validate({"a": 1, "b": "2"})
        assert result == Ok({"a": 1, "b": 2})

    def test_empty_mapping(self):
        assert Record(Number).validate({}) == Ok({})

    def test_fails_on_invalid_value(self):
        assert Record(Number).validate({"a": 1, "b": "x"}) == Err("'x' is not a number")

    def test_non_string_key_fails(self):
        assert isinstance(Record(Number).validate({1: 1}), Err)

    @pytest.mark.parametrize("value", [None, [1], "abc"])
    def test_non_mapping_fails(self, value):
        assert isinstance(Record(Number).validate(value), Err)

    def test_schema(self):
        assert Record(String).to_json() == {"type": "Record", "valueType": "string"}


class TestNullable:
    def test_none_passes(self):
        assert Nullable(Number).validate(None) == Ok(None)

    def test_other_values_use_inner(self):
        assert Nullable(Number).validate("5") == Ok(5)
        assert Nullable(Number).validate("x") == Err("'x' is not a number")

    def test_schema(self):
        assert Nullable(Number).to_json() == {"type": "Nullable", "contentType": "number"}


class TestUnion:
    def test_first_success_wins(self):
        assert Union(String, Number).validate("1") == Ok("1")
        assert Union(Number, String).validate("1") == Ok(1)

    def test_literal_union(self):
        Direction = Union(Literal("asc"), Literal("desc"))
        assert Direction.validate("desc") == Ok("desc")

    def test_all_failures_are_combined(self):
        result = Union(Literal(1), Literal(2)).validate(3)
        assert isinstance(result, Err)
        assert result.value == (
            "3 is not the union type, messages:\n"
            "3 is not equal to 1\n"
            "3 is not equal to 2"
        )

    def test_every_alternative_is_tried(self):
        tried = []

        def spy(name):
            def validate(value):
                tried.append(name)
                return Err(name)

            return Number.pipe(validate, lambda: "number")

        Union(spy("a"), spy("b"), spy("c")).validate(1)
        assert tried == ["a", "b", "c"]

    def test_empty_union_raises(self):
        with pytest.raises(TypeError):
            Union()

    def test_schema(self):
        assert Union(Number, Literal(None)).to_json() == {
            "type": "Union",
            "contentTypes": ["number", {"type": "Literal", "literal": None}],
        }


class TestJson:
    def test_nested_values(self):
        data = {"a": [1, "x", None, True, {"b": []}], "c": 2.5}
        assert Json.validate(data) == Ok(data)

    def test_strings_are_preserved(self):
        data = {"zip": "02134", "n": " 7 ", "flag": "true", "x": "4.5"}
        assert Json.validate(data) == Ok(data)
        assert Json.validate("42").value == "42"

    def test_strings_preserved_in_any_context(self):
        data = {"zip": "02134", "flag": "false"}
        with schema_context(coerce=True):
            assert Json.validate(data) == Ok(data)
        with schema_context(coerce=False):
            assert Json.validate(data) == Ok(data)

    @pytest.mark.parametrize("value", [object(), {"a": {1, 2}}, [b"bytes"]])
    def test_non_json_fails(self, value):
        assert isinstance(Json.validate(value), Err)

    def test_schema(self):
        ref = {"type": "Ref", "name": "Json"}
        assert Json.to_json() == {
            "type": "Union",
            "contentTypes": [
                "number",
                "string",
                "boolean",
                {"type": "Literal", "literal": None},
                {"type": "List", "itemType": ref},
                {"type": "Record", "valueType": ref},
            ],
        }
        assert Json.to_json() is Json.to_json()
