"""
sigil - composable runtime type descriptors.

Usage:
    from sigil import Object, List, Number, String, Pattern

    Todo = Object({"id": Number, "content": String})
    Todos = List(Todo)

    Todos.validate([{"id": "1", "content": "a"}])   # Ok([{"id": 1, "content": "a"}])
    todo = Todo({"id": 1, "content": "a"})          # Term, raises on invalid input
    Todo.is_(todo)                                  # True
    Todo.to_json()                                  # schema document

    Item = Pattern("/items/:id", Object({"id": Number}))
"""

import logging

from .combinators import Json, List, Nullable, Object, ObjectType, Record, Union
from .context import is_coercing, schema_context
from .core import Type, create_type, is_term, thunk
from .errors import BrandMismatch, InvalidInput, PatternSyntaxError, SigilError
from .parser import compile_pattern
from .pattern import Pattern
from .primitives import (
    Any,
    Boolean,
    Literal,
    Number,
    StrictBoolean,
    StrictNumber,
    String,
)
from .schema import dumps, to_pydantic
from .types import Err, Kind, Ok, Result, Term

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    "Term",
    "Kind",
    # Core
    "Type",
    "create_type",
    "is_term",
    "thunk",
    # Primitives
    "Number",
    "String",
    "Boolean",
    "StrictNumber",
    "StrictBoolean",
    "Literal",
    "Any",
    # Combinators
    "List",
    "Object",
    "ObjectType",
    "Record",
    "Nullable",
    "Union",
    "Json",
    "Pattern",
    "compile_pattern",
    # Schema
    "dumps",
    "to_pydantic",
    # Config
    "schema_context",
    "is_coercing",
    # Errors
    "SigilError",
    "InvalidInput",
    "BrandMismatch",
    "PatternSyntaxError",
]
