"""
Exceptions raised by preserve_context itself.

Exceptions raised inside a producer or continuation are never wrapped in
these classes; they propagate to the caller unchanged.
"""

from __future__ import annotations


class PreserveContextError(Exception):
    """Base class for errors raised by the library."""

    pass


class InvalidContextError(PreserveContextError, ValueError):
    """Raised when a calling context is not one of void, scalar or list."""

    pass


class InvalidModeError(PreserveContextError, ValueError):
    """Raised for an unknown mode, or when neither/both continuations are given."""

    pass


class ArityError(PreserveContextError):
    """
    Raised when an after-mode continuation resizes the result list.

    Only raised under ``ResizePolicy.STRICT``.

    Attributes:
        expected: Number of values the producer returned.
        actual: Number of values left after the continuation ran.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"after continuation resized the result from {expected} "
            f"to {actual} value(s); mutate elements in place instead"
        )


class ConfigError(PreserveContextError, ValueError):
    """Raised when an invoker configuration cannot be parsed."""

    pass
