"""
Schema operations for sigil descriptors.

Provides dumps() and to_pydantic() functions.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, create_model

from .combinators import ObjectType
from .core import Type


def dumps(descriptor: Type[Any], **kwargs: Any) -> str:
    """
    Serialize a descriptor's schema document to JSON text.

    Usage:
        dumps(Object({"id": Number}))
        # '{"type": "Object", "fields": [{"key": "id", "type": "number"}]}'
    """
    return json.dumps(descriptor.to_json(), **kwargs)


def to_pydantic(
    name: str, descriptor: ObjectType | Mapping[str, Type[Any]]
) -> type[BaseModel]:
    """
    Compile an Object descriptor to a Pydantic model.

    Args:
        name: Name of the generated model class
        descriptor: Object descriptor, or a mapping of field descriptors

    Returns:
        A Pydantic BaseModel subclass whose fields validate (and coerce)
        with the original descriptors

    Usage:
        Todo = to_pydantic("Todo", Object({
            "id": Number,
            "content": String,
            "note": Nullable(String),
        }))
        todo = Todo(id="1", content="write docs")   # todo.id == 1
    """
    match descriptor:
        case ObjectType(fields=fields):
            pass
        case Type():
            raise TypeError(f"to_pydantic() requires an Object descriptor, got {descriptor.name}")
        case Mapping():
            fields = descriptor
        case _:
            raise TypeError(
                f"to_pydantic() requires an Object descriptor, got {type(descriptor).__name__}"
            )

    model_fields: dict[str, Any] = {}

    for key, field_type in fields.items():
        default = None if field_type.validate_fn(None).is_ok() else ...
        model_fields[key] = (Annotated[Any, field_type], default)

    return create_model(name, **model_fields)
