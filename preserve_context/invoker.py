"""
Context-preserving invocation.

Runs a producer in the calling context the call site asks for, hands its
result to a continuation, and returns the value(s) shaped for that context:

    context  producer result      continuation gets   after returns     replace returns
    -------  -------------------  ------------------  ----------------  ----------------------
    void     discarded            []                  None              None
    scalar   one object           [value]             values[0]         return value as-is
    list     as_values(result)    that list           the list          as_values(return value)

Ordering guarantees:
- The producer runs exactly once, before the continuation
- The continuation runs exactly once, always on the producer's result
- An exception from either callable propagates unchanged; nothing is
  returned and, for the producer, the continuation never runs
"""

from __future__ import annotations

import logging
from typing import Any

from preserve_context._sequence import as_values, fit_arity
from preserve_context.config import InvokerConfig
from preserve_context.errors import InvalidModeError
from preserve_context.types import CallContext, Continuation, Mode, Producer

logger = logging.getLogger(__name__)


def _require_callable(obj: Any, role: str) -> None:
    if not callable(obj):
        raise TypeError(f"{role} must be callable, got {type(obj).__name__}")


def select_continuation(
    after: Continuation | None,
    replace: Continuation | None,
) -> tuple[Mode, Continuation]:
    """
    Pick the mode from whichever of *after* / *replace* was supplied.

    Raises:
        InvalidModeError: If neither or both are given.
    """
    if after is not None and replace is not None:
        raise InvalidModeError("Cannot supply both an 'after' and a 'replace' callable")
    if after is not None:
        return Mode.AFTER, after
    if replace is not None:
        return Mode.REPLACE, replace
    raise InvalidModeError("Need an 'after' or a 'replace' callable")


class Invoker:
    """
    Invokes producers under an explicit calling context.

    Holds only a frozen InvokerConfig, so one instance can be shared freely.
    """

    def __init__(self, config: InvokerConfig | None = None) -> None:
        """
        Initialize the invoker.

        Args:
            config: Invocation settings (defaults to ``InvokerConfig()``).
        """
        self._config = config or InvokerConfig()

    @property
    def config(self) -> InvokerConfig:
        """The settings this invoker applies."""
        return self._config

    def invoke(
        self,
        context: CallContext | str,
        producer: Producer,
        mode: Mode | str,
        continuation: Continuation,
    ) -> Any:
        """
        Run *producer* in *context*, then *continuation* on its result.

        Args:
            context: The result shape the caller expects.
            producer: Zero-argument callable, invoked exactly once.
            mode: AFTER to let the continuation mutate the result list in
                place (its return value is discarded), REPLACE to use the
                continuation's return value as the result.
            continuation: Callable receiving the producer's result as a list.

        Returns:
            None for VOID, a single value for SCALAR, a list for LIST.

        Raises:
            InvalidContextError: If *context* is not a calling context.
            InvalidModeError: If *mode* is not a mode.
            TypeError: If *producer* or *continuation* is not callable.
            ArityError: If an AFTER continuation resized the result under
                ResizePolicy.STRICT.
        """
        context = CallContext.coerce(context)
        mode = Mode.coerce(mode)
        _require_callable(producer, "producer")
        _require_callable(continuation, "continuation")

        if context is CallContext.VOID:
            logger.debug("Invoking %r in void context (%s)", producer, mode.value)
            producer()
            continuation([])
            return None

        if context is CallContext.SCALAR:
            logger.debug("Invoking %r in scalar context (%s)", producer, mode.value)
            values = [producer()]
            outcome = continuation(values)
            if mode is Mode.REPLACE:
                return outcome
            values = fit_arity(values, 1, self._config.resize_policy)
            return values[0] if values else None

        values = as_values(producer())
        arity = len(values)
        logger.debug(
            "Invoked %r in list context, %d value(s) (%s)", producer, arity, mode.value
        )
        outcome = continuation(values)
        if mode is Mode.REPLACE:
            return as_values(outcome)
        return fit_arity(values, arity, self._config.resize_policy)

    def preserve(
        self,
        producer: Producer,
        *,
        after: Continuation | None = None,
        replace: Continuation | None = None,
        context: CallContext | str | None = None,
    ) -> Any:
        """
        Keyword front end to :meth:`invoke`.

        Exactly one of *after* / *replace* must be given. *context* defaults
        to the config's ``default_context``.
        """
        mode, continuation = select_continuation(after, replace)
        if context is None:
            context = self._config.default_context
        return self.invoke(context, producer, mode, continuation)

    def call_void(
        self,
        producer: Producer,
        *,
        after: Continuation | None = None,
        replace: Continuation | None = None,
    ) -> None:
        """Run *producer* for effect only; the continuation receives ``[]``."""
        return self.preserve(
            producer, after=after, replace=replace, context=CallContext.VOID
        )

    def call_scalar(
        self,
        producer: Producer,
        *,
        after: Continuation | None = None,
        replace: Continuation | None = None,
    ) -> Any:
        """Run *producer* for a single value."""
        return self.preserve(
            producer, after=after, replace=replace, context=CallContext.SCALAR
        )

    def call_list(
        self,
        producer: Producer,
        *,
        after: Continuation | None = None,
        replace: Continuation | None = None,
    ) -> list[Any]:
        """Run *producer* for a list of values."""
        return self.preserve(
            producer, after=after, replace=replace, context=CallContext.LIST
        )

    def __repr__(self) -> str:
        return (
            f"Invoker(resize_policy={self._config.resize_policy.value!r}, "
            f"default_context={self._config.default_context.value!r})"
        )


def invoke(
    context: CallContext | str,
    producer: Producer,
    mode: Mode | str,
    continuation: Continuation,
    *,
    config: InvokerConfig | None = None,
) -> Any:
    """
    Run *producer* in *context*, then *continuation* on its result.

    See :meth:`Invoker.invoke`.

    Example:
        ```python
        def bump(values):
            values[0] += 1

        invoke("scalar", lambda: 41, "after", bump)  # 42
        invoke("list", lambda: [1, 2, 3], "replace", lambda v: ["x", "y"])  # ["x", "y"]
        ```
    """
    return Invoker(config).invoke(context, producer, mode, continuation)


def preserve_context(
    producer: Producer,
    *,
    after: Continuation | None = None,
    replace: Continuation | None = None,
    context: CallContext | str | None = None,
    config: InvokerConfig | None = None,
) -> Any:
    """
    Run *producer*, then *after* or *replace* on its result.

    Example:
        ```python
        def load_rows():
            return preserve_context(
                lambda: db.fetch_rows(),
                after=lambda rows: log.info("fetched %d rows", len(rows)),
                context="list",
            )
        ```

    Raises:
        InvalidModeError: If neither or both of *after* / *replace* are given.
    """
    return Invoker(config).preserve(
        producer, after=after, replace=replace, context=context
    )


def call_void(
    producer: Producer,
    *,
    after: Continuation | None = None,
    replace: Continuation | None = None,
    config: InvokerConfig | None = None,
) -> None:
    """Module-level :meth:`Invoker.call_void`."""
    return Invoker(config).call_void(producer, after=after, replace=replace)


def call_scalar(
    producer: Producer,
    *,
    after: Continuation | None = None,
    replace: Continuation | None = None,
    config: InvokerConfig | None = None,
) -> Any:
    """Module-level :meth:`Invoker.call_scalar`."""
    return Invoker(config).call_scalar(producer, after=after, replace=replace)


def call_list(
    producer: Producer,
    *,
    after: Continuation | None = None,
    replace: Continuation | None = None,
    config: InvokerConfig | None = None,
) -> list[Any]:
    """Module-level :meth:`Invoker.call_list`."""
    return Invoker(config).call_list(producer, after=after, replace=replace)
