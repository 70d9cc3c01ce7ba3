"""
Tests for sigil.schema: dumps and to_pydantic.
"""

import json
from typing import Annotated

import pytest
from pydantic import BaseModel, ValidationError

from sigil import (
    Any,
    Json,
    List,
    Literal,
    Nullable,
    Number,
    Object,
    Pattern,
    String,
    Union,
    dumps,
    to_pydantic,
)


class TestDumps:
    def test_object(self):
        assert dumps(Object({"id": Number})) == (
            '{"type": "Object", "fields": [{"key": "id", "type": "number"}]}'
        )

    def test_kwargs_are_passed_to_json(self):
        text = dumps(List(String), indent=2)
        assert json.loads(text) == {"type": "List", "itemType": "string"}
        assert "\n" in text

    def test_recursive_schema(self):
        assert json.loads(dumps(Json))["type"] == "Union"

    def test_full_grammar(self):
        Api = Object(
            {
                "route": Pattern("/items/:id", Object({"id": Number})),
                "tags": List(String),
                "sort": Union(Literal("asc"), Literal("desc")),
                "note": Nullable(String),
                "extra": Any,
            }
        )
        assert json.loads(dumps(Api)) == {
            "type": "Object",
            "fields": [
                {
                    "key": "route",
                    "type": {
                        "type": "Pattern",
                        "pattern": "/items/:id",
                        "paramsType": {
                            "type": "Object",
                            "fields": [{"key": "id", "type": "number"}],
                        },
                    },
                },
                {"key": "tags", "type": {"type": "List", "itemType": "string"}},
                {
                    "key": "sort",
                    "type": {
                        "type": "Union",
                        "contentTypes": [
                            {"type": "Literal", "literal": "asc"},
                            {"type": "Literal", "literal": "desc"},
                        ],
                    },
                },
                {"key": "note", "type": {"type": "Nullable", "contentType": "string"}},
                {"key": "extra", "type": {"type": "Any"}},
            ],
        }


class TestToPydantic:
    def test_simple_model(self):
        Todo = to_pydantic("Todo", Object({"id": Number, "content": String}))
        todo = Todo(id=1, content="write docs")
        assert todo.id == 1
        assert todo.content == "write docs"

    def test_fields_are_coerced(self):
        Todo = to_pydantic("Todo", Object({"id": Number, "tags": List(Number)}))
        todo = Todo(id="7", tags=["1", 2])
        assert todo.id == 7
        assert todo.tags == [1, 2]

    def test_nullable_fields_default_to_none(self):
        Todo = to_pydantic("Todo", Object({"id": Number, "note": Nullable(String)}))
        todo = Todo(id=1)
        assert todo.note is None

    def test_missing_required_field(self):
        Todo = to_pydantic("Todo", Object({"id": Number}))
        with pytest.raises(ValidationError):
            Todo()

    def test_invalid_field_carries_message(self):
        Todo = to_pydantic("Todo", Object({"id": Number}))
        with pytest.raises(ValidationError) as exc_info:
            Todo(id="x")
        assert "'x' is not a number" in str(exc_info.value)

    def test_accepts_field_mapping(self):
        User = to_pydantic("User", {"name": String})
        assert User(name="Ada").name == "Ada"

    def test_non_object_descriptor_raises(self):
        with pytest.raises(TypeError):
            to_pydantic("Bad", Number)
        with pytest.raises(TypeError):
            to_pydantic("Bad", ["id"])  # type: ignore[arg-type]


class TestPydanticAnnotation:
    def test_descriptor_as_metadata(self):
        class Item(BaseModel):
            id: Annotated[int, Number]
            route: Annotated[dict, Pattern("/items/:id", Object({"id": Number}))]

        item = Item(id="3", route="/items/42")
        assert item.id == 3
        assert item.route == {"id": 42}

        with pytest.raises(ValidationError):
            Item(id=3, route="/other")
