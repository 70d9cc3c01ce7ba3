"""
Primitive descriptors for sigil.

Provides the Number, String, Boolean and Any singletons, their
non-coercing StrictNumber and StrictBoolean variants, and the Literal
factory.
"""

from __future__ import annotations

import math
import typing

from .context import is_coercing
from .core import Type, create_type
from .types import Err, Ok

LiteralValue = typing.Union[str, int, float, bool, None]


def _is_number(x: typing.Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _parse_number(text: str) -> int | float | None:
    """Parse a numeric string: "42" -> 42, "4.5" -> 4.5, otherwise None."""
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        n = float(text)
    except ValueError:
        return None
    if math.isnan(n):
        return None
    return n


def _number(coerce: bool | None) -> typing.Callable[[typing.Any], Ok[int | float] | Err[str]]:
    def validate(value: typing.Any) -> Ok[int | float] | Err[str]:
        if isinstance(value, str) and (is_coercing() if coerce is None else coerce):
            n = _parse_number(value)
            if n is not None:
                value = n
        if _is_number(value):
            return Ok(value)
        return Err(f"{value!r} is not a number")

    return validate


def _validate_string(value: typing.Any) -> Ok[str] | Err[str]:
    if isinstance(value, str):
        return Ok(value)
    return Err(f"{value!r} is not a string")


def _boolean(coerce: bool | None) -> typing.Callable[[typing.Any], Ok[bool] | Err[str]]:
    def validate(value: typing.Any) -> Ok[bool] | Err[str]:
        if isinstance(value, str) and (is_coercing() if coerce is None else coerce):
            if value == "true":
                value = True
            elif value == "false":
                value = False
        if isinstance(value, bool):
            return Ok(value)
        return Err(f"{value!r} is not a boolean")

    return validate


# Coercion follows schema_context()
Number: Type[int | float] = create_type(_number(None), lambda: "number", name="Number")

String: Type[str] = create_type(_validate_string, lambda: "string", name="String")

Boolean: Type[bool] = create_type(_boolean(None), lambda: "boolean", name="Boolean")

# Never coerce strings, whatever the context says
StrictNumber: Type[int | float] = create_type(
    _number(False), lambda: "number", name="StrictNumber"
)

StrictBoolean: Type[bool] = create_type(
    _boolean(False), lambda: "boolean", name="StrictBoolean"
)

Any: Type[typing.Any] = create_type(Ok, lambda: {"type": "Any"}, name="Any")


def _strict_equals(a: typing.Any, b: typing.Any) -> bool:
    """Equality without cross-type matches such as 1 == True or 1 == "1"."""
    if a is None or b is None:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if _is_number(a) and _is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def Literal(literal: LiteralValue) -> Type[typing.Any]:
    """
    Accept exactly one value.

    Usage:
        Literal("active")
        Literal(None)
        Union(Literal(1), Literal(2))
    """
    if literal is not None and not isinstance(literal, (str, int, float, bool)):
        raise TypeError(
            f"Literal() accepts str, int, float, bool or None, got {type(literal).__name__}"
        )

    def validate(value: typing.Any) -> Ok[typing.Any] | Err[str]:
        if _strict_equals(value, literal):
            return Ok(literal)
        return Err(f"{value!r} is not equal to {literal!r}")

    return create_type(
        validate,
        lambda: {"type": "Literal", "literal": literal},
        name=f"Literal[{literal!r}]",
    )
