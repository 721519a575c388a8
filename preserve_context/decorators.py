"""
Decorator that binds a continuation to a function.

The @preserved decorator wraps a function so every call runs it as the
producer, under a calling context fixed at decoration time, followed by the
bound after/replace continuation.
"""

from __future__ import annotations

import copy
import functools
from types import MethodType
from typing import Any, Callable, TypeVar

from preserve_context.config import InvokerConfig
from preserve_context.invoker import Invoker, select_continuation
from preserve_context.types import CallContext, Continuation, Mode

F = TypeVar("F", bound=Callable[..., Any])


class PreservedCall:
    """
    Wrapper around a function whose result passes through a continuation.

    Provides:

    - The wrapped function's metadata (``functools.update_wrapper``)
    - A default calling context used by ``__call__``
    - ``call_void`` / ``call_scalar`` / ``call_list`` to pick the context at
      the call site instead
    """

    def __init__(
        self,
        func: Callable[..., Any],
        continuation: Continuation,
        mode: Mode | str,
        context: CallContext | str = CallContext.SCALAR,
        config: InvokerConfig | None = None,
    ) -> None:
        """
        Initialize the wrapper.

        Args:
            func: The function to run as the producer.
            continuation: Callable receiving the function's result as a list.
            mode: AFTER or REPLACE.
            context: Calling context used by ``__call__``.
            config: Invocation settings.

        Raises:
            TypeError: If *func* or *continuation* is not callable.
            InvalidModeError: If *mode* is not a mode.
            InvalidContextError: If *context* is not a calling context.
        """
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        if not callable(continuation):
            raise TypeError(
                f"continuation must be callable, got {type(continuation).__name__}"
            )
        self._func = func
        self._continuation = continuation
        self._mode = Mode.coerce(mode)
        self._context = CallContext.coerce(context)
        self._invoker = Invoker(config)

        # Preserve function metadata
        functools.update_wrapper(self, func)

    @property
    def mode(self) -> Mode:
        """How the continuation's outcome is used."""
        return self._mode

    @property
    def context(self) -> CallContext:
        """The calling context ``__call__`` uses."""
        return self._context

    def call_in(self, context: CallContext | str, *args: Any, **kwargs: Any) -> Any:
        """Call the wrapped function under *context*."""
        return self._invoker.invoke(
            context,
            functools.partial(self._func, *args, **kwargs),
            self._mode,
            self._continuation,
        )

    def call_void(self, *args: Any, **kwargs: Any) -> None:
        """Call for effect only."""
        return self.call_in(CallContext.VOID, *args, **kwargs)

    def call_scalar(self, *args: Any, **kwargs: Any) -> Any:
        """Call for a single value."""
        return self.call_in(CallContext.SCALAR, *args, **kwargs)

    def call_list(self, *args: Any, **kwargs: Any) -> list[Any]:
        """Call for a list of values."""
        return self.call_in(CallContext.LIST, *args, **kwargs)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.call_in(self._context, *args, **kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> PreservedCall:
        # Bind like a plain function; the bound copy keeps the call_* methods
        if instance is None:
            return self
        bound = copy.copy(self)
        bound._func = MethodType(self._func, instance)
        return bound

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"PreservedCall({name}, {self._mode.value}, {self._context.value})"


def preserved(
    func: F | None = None,
    *,
    after: Continuation | None = None,
    replace: Continuation | None = None,
    context: CallContext | str = CallContext.SCALAR,
    config: InvokerConfig | None = None,
) -> PreservedCall | Callable[[F], PreservedCall]:
    """
    Decorator that runs a continuation on every result of a function.

    Exactly one of *after* / *replace* must be given:

    ```python
    def audit(values):
        log.info("returned %r", values)

    @preserved(after=audit, context="list")
    def lookup(key):
        return index.get_all(key)

    lookup("a")               # list context, audit sees every value
    lookup.call_scalar("a")   # pick a different context at the call site
    ```

    Args:
        func: The function to decorate (when applied directly).
        after: Continuation that may mutate the result list in place.
        replace: Continuation whose return value becomes the result.
        context: Calling context used when the wrapper is called.
        config: Invocation settings.

    Returns:
        A PreservedCall or a decorator that creates one.

    Raises:
        InvalidModeError: If neither or both of *after* / *replace* are given.
    """
    mode, continuation = select_continuation(after, replace)

    def decorator(fn: F) -> PreservedCall:
        return PreservedCall(fn, continuation, mode, context=context, config=config)

    if func is not None:
        return decorator(func)

    return decorator
