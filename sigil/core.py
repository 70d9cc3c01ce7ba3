"""
Core descriptor classes for sigil.

Provides the Type dataclass, the create_type factory and thunk for
self-referential descriptors.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .errors import BrandMismatch, InvalidInput
from .types import Err, JsonSchema, Kind, Ok, Term, ToJsonFn, ValidateFn

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# One lock for every write-once cell, so nested computations share one lock order
_once_lock = threading.RLock()
_thunk_serials = itertools.count(1)


class _Once(Generic[T]):
    """
    Write-once cell.

    `compute` runs at most once; other threads block on the shared lock
    until the first caller has stored the value. A re-entrant request from
    the computing thread is answered by `on_reentry` and never cached.
    """

    __slots__ = ("_compute", "_on_reentry", "_running", "_done", "_value")

    def __init__(self, compute: Callable[[], T], on_reentry: Callable[[], T]):
        self._compute = compute
        self._on_reentry = on_reentry
        self._running = False
        self._done = False
        self._value: T | None = None

    def get(self) -> T:
        if self._done:
            return self._value  # type: ignore[return-value]
        with _once_lock:
            if self._done:
                return self._value  # type: ignore[return-value]
            if self._running:
                return self._on_reentry()
            self._running = True
            try:
                value = self._compute()
            finally:
                self._running = False
            self._value = value
            self._done = True
            return value


@dataclass(frozen=True, eq=False)
class Type(Generic[T]):
    """
    Immutable type descriptor.

    The fundamental building block. Wraps a validate function and a schema
    serializer, and brands every value it produces with its own Kind.

    Usage:
        Todo = Object({"id": Number, "content": String})
        todo = Todo({"id": 1, "content": "write docs"})   # Term
        Todo.validate({"id": "x"})                         # Err(...)
    """

    validate_fn: ValidateFn = field(repr=False)
    to_json_fn: ToJsonFn = field(repr=False)
    name: str = "Type"
    kind: Kind = field(init=False)
    _schema: _Once[JsonSchema] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", Kind(self.name))
        object.__setattr__(
            self, "_schema", _Once(self.to_json_fn, self._on_schema_cycle)
        )

    def __call__(self, value: Any) -> Term[T]:
        """
        Validate a value and brand it.

        Returns:
            Term(kind, value) if validation passes

        Raises:
            InvalidInput: if validation fails
        """
        result = self.validate_fn(value)
        if isinstance(result, Err):
            raise InvalidInput(result.value)
        return Term(self.kind, result.value)

    def validate(self, value: Any) -> Ok[T] | Err[str]:
        """Validate without raising."""
        return self.validate_fn(value)

    def is_(self, term: Any) -> bool:
        """Check the brand of a term. No structural inspection."""
        return isinstance(term, Term) and term.kind is self.kind

    def assert_(self, term: Any) -> None:
        if not self.is_(term):
            raise BrandMismatch(term, self)

    def pipe(
        self,
        validate: Callable[[T], Ok[R] | Err[str]],
        to_json: ToJsonFn,
        *,
        name: str | None = None,
    ) -> Type[R]:
        """
        Derive a new descriptor that runs `validate` after this one succeeds.

        The derived descriptor has its own Kind and its schema comes from
        `to_json` alone.

        Usage:
            Port = Number.pipe(
                lambda n: Ok(n) if 0 < n < 65536 else Err(f"{n} is not a port"),
                lambda: "number",
            )
        """
        base = self.validate_fn

        def piped(value: Any) -> Ok[R] | Err[str]:
            result = base(value)
            if isinstance(result, Err):
                return result
            return validate(result.value)

        return create_type(piped, to_json, name=name or self.name)

    def to_json(self) -> JsonSchema:
        """Return the schema document, computed once per descriptor."""
        return self._schema.get()

    def _on_schema_cycle(self) -> JsonSchema:
        raise RecursionError(
            f"{self.name} schema refers to itself; wrap the reference in thunk()"
        )

    def _pydantic_validate(self, value: Any) -> T:
        result = self.validate_fn(value)
        if isinstance(result, Err):
            raise ValueError(result.value)
        return result.value

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Let a descriptor act as pydantic metadata: Annotated[Any, Number]."""
        return core_schema.no_info_plain_validator_function(self._pydantic_validate)


@dataclass(frozen=True, eq=False)
class ThunkType(Type[T]):
    """Descriptor whose target is built lazily; see `thunk`."""

    def _on_schema_cycle(self) -> JsonSchema:
        return {"type": "Ref", "name": self.name}


def create_type(
    validate: ValidateFn, to_json: ToJsonFn, *, name: str = "Type"
) -> Type[Any]:
    """
    Build a descriptor from a validate function and a schema serializer.

    Args:
        validate: Function returning Ok(value) or Err(message), never raising
        to_json: Zero-argument function returning the schema document

    Usage:
        Even = create_type(
            lambda x: Ok(x) if isinstance(x, int) and x % 2 == 0 else Err(f"{x!r} is odd"),
            lambda: {"type": "Even"},
        )
    """
    return Type(validate, to_json, name=name)


def is_term(term: Any, descriptor: Type[Any]) -> bool:
    """Standalone brand check: is_term(t, Todo) == Todo.is_(t)."""
    return descriptor.is_(term)


def thunk(factory: Callable[[], Type[T]], *, name: str | None = None) -> Type[T]:
    """
    Defer building a descriptor until first use.

    The factory runs at most once; the resolved descriptor is reused for
    every later validate/to_json call. A descriptor can therefore refer to
    itself inside its own factory.

    Unnamed thunks are named "Thunk1", "Thunk2", ... so that schema
    references stay distinguishable.

    Usage:
        Tree = thunk(lambda: Object({"value": Number, "children": List(Tree)}), name="Tree")
    """
    if name is None:
        name = f"Thunk{next(_thunk_serials)}"

    def resolve() -> Type[T]:
        logger.debug("Resolving thunk %s", name)
        return factory()

    def cycle() -> Type[T]:
        raise RecursionError(f"Thunk {name} factory depends on its own result")

    target: _Once[Type[T]] = _Once(resolve, cycle)

    def validate(value: Any) -> Ok[T] | Err[str]:
        return target.get().validate_fn(value)

    def to_json() -> JsonSchema:
        return target.get().to_json()

    return ThunkType(validate, to_json, name=name)
