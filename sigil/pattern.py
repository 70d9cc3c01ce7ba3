"""
Pattern descriptor: typed parameters extracted from route-style paths.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from .core import Type
from .parser import compile_pattern
from .primitives import String
from .types import Err, JsonSchema, Ok


class RouteMatch(Protocol):
    params: dict[str, str]


Matcher = Callable[[str], Optional[RouteMatch]]


def Pattern(
    pattern: str,
    params: Type[Any],
    *,
    compile: Callable[[str], Matcher] = compile_pattern,
) -> Type[Any]:
    """
    Validate a path against a route pattern and its parameters.

    The path must be a string that matches `pattern`; the extracted
    parameters (all strings) are then validated by `params`, which applies
    its own coercion.

    Args:
        pattern: Route pattern (e.g., "/items/:id")
        params: Descriptor for the parameter mapping, usually an Object
        compile: Pattern compiler, `compile(pattern)(path) -> match | None`

    Usage:
        Item = Pattern("/items/:id", Object({"id": Number}))
        Item.validate("/items/42")    # Ok({"id": 42})
        Item.validate("/other")       # Err(...)
    """
    match = compile(pattern)

    def validate(path: str) -> Ok[Any] | Err[str]:
        matched = match(path)
        if matched is None:
            return Err(f"{path!r} is not matched the pattern: {pattern}")
        return params.validate_fn(matched.params)

    def to_json() -> JsonSchema:
        return {
            "type": "Pattern",
            "pattern": pattern,
            "paramsType": params.to_json(),
        }

    return String.pipe(validate, to_json, name=f"Pattern[{pattern}]")
