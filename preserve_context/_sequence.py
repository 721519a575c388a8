"""
Result-list helpers (internal).

Rules for turning a value into the list of values a LIST-context call
returns:
- None means no values
- Strings, bytes and mappings are single values, not sequences of values
- Other iterables are materialised into a new list
- Anything else is a single value
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from preserve_context.errors import ArityError
from preserve_context.types import ResizePolicy

logger = logging.getLogger(__name__)

_ATOMIC_TYPES = (str, bytes, bytearray, Mapping)


def as_values(value: Any) -> list[Any]:
    """
    Convert a value to a list of result values.

    Always returns a new list, so mutating the result never touches the
    object the value came from.
    """
    if value is None:
        return []
    if isinstance(value, _ATOMIC_TYPES):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def fit_arity(values: list[Any], arity: int, policy: ResizePolicy) -> list[Any]:
    """
    Apply a resize policy to a list an after continuation may have resized.

    Args:
        values: The list as left by the continuation.
        arity: The number of values the producer returned.
        policy: What to do when the length no longer matches.

    Returns:
        The list to return to the caller.

    Raises:
        ArityError: If the length changed under ResizePolicy.STRICT.
    """
    actual = len(values)
    if actual == arity:
        return values

    if policy is ResizePolicy.STRICT:
        raise ArityError(expected=arity, actual=actual)

    if policy is ResizePolicy.ALLOW:
        logger.warning(
            "after continuation resized the result from %d to %d value(s)",
            arity,
            actual,
        )
        return values

    logger.debug("Fitting resized result from %d back to %d value(s)", actual, arity)
    if actual > arity:
        del values[arity:]
    else:
        values.extend([None] * (arity - actual))
    return values
