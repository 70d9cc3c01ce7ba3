"""
Exceptions raised at the throwing edges of sigil.

Inside the validation pipeline failures travel as `Err(message)`; only the
entry points below turn them into exceptions.
"""

from __future__ import annotations

from typing import Any


class SigilError(Exception):
    """Base class for sigil errors."""


class InvalidInput(SigilError, ValueError):
    """A descriptor was invoked on a value that failed validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BrandMismatch(SigilError, TypeError):
    """`assert_` was given a term produced by another descriptor."""

    def __init__(self, term: Any, expected: Any):
        super().__init__(f"Unexpected value: {term!r} (expected a term of {expected!r})")
        self.term = term
        self.expected = expected


class PatternSyntaxError(SigilError, ValueError):
    """A route pattern could not be compiled."""

    def __init__(self, pattern: str, position: int, reason: str):
        super().__init__(f"{reason} at {position} in pattern: {pattern}")
        self.pattern = pattern
        self.position = position
        self.reason = reason
