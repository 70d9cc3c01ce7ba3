"""
Type definitions for sigil.

Provides a minimal Result type (Ok/Err), the Term/Kind branding pair and
type aliases shared by every descriptor.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

_serials = itertools.count(1)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure result containing an error value (a message inside sigil)."""

    value: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, eq=False)
class Kind:
    """
    Opaque identity token minted once per descriptor.

    Compared by identity only; `serial` and `name` exist for repr.
    """

    name: str = "Type"
    serial: int = field(default_factory=lambda: next(_serials))

    def __repr__(self) -> str:
        return f"Kind({self.name}#{self.serial})"


@dataclass(frozen=True, slots=True)
class Term(Generic[T]):
    """A value branded with the kind of the descriptor that produced it."""

    kind: Kind
    value: T


# Type aliases
Result = Union[Ok[T], Err[str]]
JsonSchema = Union[str, dict[str, Any]]
ValidateFn = Callable[[Any], "Ok[Any] | Err[str]"]
ToJsonFn = Callable[[], JsonSchema]
