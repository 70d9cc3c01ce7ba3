"""
Context manager for validation configuration (e.g., string coercion).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for string coercion in Number and Boolean
_coerce: ContextVar[bool] = ContextVar("coerce", default=True)


def is_coercing() -> bool:
    """Check if string coercion is currently enabled."""
    return _coerce.get()


@contextmanager
def schema_context(*, coerce: bool = True):
    """
    Context manager for validation configuration.

    Args:
        coerce: If False, Number no longer accepts numeric strings and
               Boolean no longer accepts "true"/"false". Only values already
               of the native type pass.

    Example:
        from sigil import Number, schema_context

        Number.validate("42")          # Ok(42)

        with schema_context(coerce=False):
            Number.validate("42")      # Err("'42' is not a number")
    """
    token = _coerce.set(coerce)
    try:
        yield
    finally:
        _coerce.reset(token)
