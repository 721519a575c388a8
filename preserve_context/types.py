"""
Core types for preserve_context (PUBLIC).

- CallContext: The result shape the caller expects (void, scalar, list)
- Mode: How the continuation treats the producer's result (after, replace)
- ResizePolicy: What happens when an after continuation changes the arity
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from preserve_context.errors import ConfigError, InvalidContextError, InvalidModeError

# Zero-argument callable run in the caller's context
Producer = Callable[[], Any]

# Receives the producer's result as a list
Continuation = Callable[[list[Any]], Any]


class CallContext(str, Enum):
    """The calling context a result is produced for."""

    VOID = "void"
    SCALAR = "scalar"
    LIST = "list"

    @classmethod
    def coerce(cls, value: CallContext | str) -> CallContext:
        """
        Convert a member or its string value to a CallContext.

        String matching is case-insensitive; ``"none"`` is accepted as an
        alias for VOID.

        Raises:
            InvalidContextError: If the value names no calling context.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key == "none":
                return cls.VOID
            try:
                return cls(key)
            except ValueError:
                pass
        valid = ", ".join(repr(m.value) for m in cls)
        raise InvalidContextError(
            f"Invalid calling context {value!r}. Valid contexts are: {valid}"
        )


class Mode(str, Enum):
    """How the continuation's outcome is used."""

    AFTER = "after"  # mutate in place, return value discarded
    REPLACE = "replace"  # return value becomes the result

    @classmethod
    def coerce(cls, value: Mode | str) -> Mode:
        """
        Convert a member or its string value to a Mode.

        Raises:
            InvalidModeError: If the value names no mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(repr(m.value) for m in cls)
        raise InvalidModeError(f"Invalid mode {value!r}. Valid modes are: {valid}")


class ResizePolicy(str, Enum):
    """Handling of an after continuation that changes the number of values."""

    STRICT = "strict"  # raise ArityError
    FIT = "fit"  # truncate or pad with None to the original arity
    ALLOW = "allow"  # keep whatever the continuation left

    @classmethod
    def coerce(cls, value: ResizePolicy | str) -> ResizePolicy:
        """
        Convert a member or its string value to a ResizePolicy.

        Raises:
            ConfigError: If the value names no policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(repr(p.value) for p in cls)
        raise ConfigError(
            f"Invalid resize_policy {value!r}. Valid policies are: {valid}"
        )
