"""
preserve_context: Run code in the caller's calling context, then act on the result.

A producer runs in the calling context the call site asks for (void, scalar
or list), its result passes through a continuation, and the final value(s)
come back shaped for that same context. The continuation either observes
and mutates the result in place (``after``) or supplies a new one
(``replace``).

Example:
    import preserve_context as pc

    def bump(values):
        values[0] += 1

    pc.call_scalar(lambda: 41, after=bump)            # 42
    pc.call_list(lambda: [1, 2, 3], replace=reversed)  # [3, 2, 1]
    pc.call_void(save, after=lambda _: log.info("saved"))

    @pc.preserved(after=lambda rows: log.debug("%d rows", len(rows)), context="list")
    def fetch_rows(query):
        return db.execute(query)
"""

__version__ = "0.1.0"

# Config
from preserve_context.config import InvokerConfig, find_config_file

# Decorator
from preserve_context.decorators import PreservedCall, preserved

# Errors
from preserve_context.errors import (
    ArityError,
    ConfigError,
    InvalidContextError,
    InvalidModeError,
    PreserveContextError,
)

# Invoker
from preserve_context.invoker import (
    Invoker,
    call_list,
    call_scalar,
    call_void,
    invoke,
    preserve_context,
)

# Types
from preserve_context.types import CallContext, Continuation, Mode, Producer, ResizePolicy

__all__ = [
    # Version
    "__version__",
    # Config
    "InvokerConfig",
    "find_config_file",
    # Decorator
    "PreservedCall",
    "preserved",
    # Errors
    "ArityError",
    "ConfigError",
    "InvalidContextError",
    "InvalidModeError",
    "PreserveContextError",
    # Invoker
    "Invoker",
    "call_list",
    "call_scalar",
    "call_void",
    "invoke",
    "preserve_context",
    # Types
    "CallContext",
    "Continuation",
    "Mode",
    "Producer",
    "ResizePolicy",
]
