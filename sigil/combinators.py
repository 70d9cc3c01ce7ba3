"""
Container combinators for sigil.

Every combinator builds a new descriptor purely from the descriptors it
wraps: List, Object, Record, Nullable, Union, plus the recursive Json.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .core import Type, create_type, thunk
from .primitives import Literal, StrictBoolean, StrictNumber, String
from .types import Err, JsonSchema, Ok


def List(item: Type[Any]) -> Type[list[Any]]:
    """
    Validate a list (or tuple) item by item, stopping at the first failure.

    Usage:
        List(Number)
        List(Object({"id": Number}))
    """

    def validate(value: Any) -> Ok[list[Any]] | Err[str]:
        if not isinstance(value, (list, tuple)):
            return Err(f"{value!r} is not a list")

        items: list[Any] = []
        for element in value:
            result = item.validate_fn(element)
            if isinstance(result, Err):
                return result
            items.append(result.value)

        return Ok(items)

    return create_type(
        validate,
        lambda: {"type": "List", "itemType": item.to_json()},
        name=f"List[{item.name}]",
    )


@dataclass(frozen=True, eq=False)
class ObjectType(Type[dict[str, Any]]):
    """Descriptor for a fixed set of named fields; see `Object`."""

    fields: Mapping[str, Type[Any]] = field(default_factory=dict, repr=False)


def Object(fields: Mapping[str, Type[Any]]) -> ObjectType:
    """
    Validate the declared fields of a mapping, in declaration order.

    Missing keys validate as None; keys that are not declared are dropped.

    Usage:
        Todo = Object({
            "id": Number,
            "content": String,
            "completed": Boolean,
        })
    """
    fields = dict(fields)
    for key, descriptor in fields.items():
        if not isinstance(descriptor, Type):
            raise TypeError(
                f"Object() field {key!r} must be a descriptor, got {type(descriptor).__name__}"
            )

    def validate(value: Any) -> Ok[dict[str, Any]] | Err[str]:
        if not isinstance(value, Mapping):
            return Err(f"{value!r} is not an object")

        obj: dict[str, Any] = {}
        for key, descriptor in fields.items():
            result = descriptor.validate_fn(value.get(key))
            if isinstance(result, Err):
                return result
            obj[key] = result.value

        return Ok(obj)

    def to_json() -> JsonSchema:
        return {
            "type": "Object",
            "fields": [
                {"key": key, "type": descriptor.to_json()}
                for key, descriptor in fields.items()
            ],
        }

    return ObjectType(validate, to_json, name="Object", fields=fields)


def Record(value_type: Type[Any]) -> Type[dict[str, Any]]:
    """
    Validate every value of a string-keyed mapping, keeping all keys.

    Usage:
        Record(Number)     # {"a": 1, "b": 2}
    """

    def validate(value: Any) -> Ok[dict[str, Any]] | Err[str]:
        if not isinstance(value, Mapping):
            return Err(f"{value!r} is not an object")

        record: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                return Err(f"{key!r} is not a string key")
            result = value_type.validate_fn(item)
            if isinstance(result, Err):
                return result
            record[key] = result.value

        return Ok(record)

    return create_type(
        validate,
        lambda: {"type": "Record", "valueType": value_type.to_json()},
        name=f"Record[{value_type.name}]",
    )


def Nullable(inner: Type[Any]) -> Type[Any]:
    """
    Let None through unvalidated, validate anything else with `inner`.

    Usage:
        Nullable(String)
    """

    def validate(value: Any) -> Ok[Any] | Err[str]:
        if value is None:
            return Ok(None)
        return inner.validate_fn(value)

    return create_type(
        validate,
        lambda: {"type": "Nullable", "contentType": inner.to_json()},
        name=f"Nullable[{inner.name}]",
    )


def Union(*types: Type[Any]) -> Type[Any]:
    """
    Accept the first alternative that validates.

    Every alternative is tried before failing, so the error lists each
    alternative's message, one per line.

    Usage:
        Union(Literal("asc"), Literal("desc"))
        Union(Number, String)
    """
    if not types:
        raise TypeError("Union() requires at least one descriptor")

    def validate(value: Any) -> Ok[Any] | Err[str]:
        messages: list[str] = []
        for alternative in types:
            result = alternative.validate_fn(value)
            if isinstance(result, Ok):
                return result
            messages.append(result.value)
        joined = "\n".join(messages)
        return Err(f"{value!r} is not the union type, messages:\n{joined}")

    return create_type(
        validate,
        lambda: {"type": "Union", "contentTypes": [t.to_json() for t in types]},
        name="Union",
    )


# Any JSON value; the thunk lets the definition refer to itself.
# JSON strings are already JSON, so no member coerces them.
Json: Type[Any] = thunk(
    lambda: Union(
        StrictNumber, String, StrictBoolean, Literal(None), List(Json), Record(Json)
    ),
    name="Json",
)
