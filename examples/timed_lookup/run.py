"""
Minimal Working Example: timing and post-processing lookups.

Usage:
    uv run python examples/timed_lookup/run.py

This demonstrates the core preserve_context workflow:
- Observe a result with an ``after`` continuation (logging, timing)
- Mutate a result in place without changing its shape
- Swap a result out with a ``replace`` continuation
- Pick the calling context at the call site
"""

import logging
import time

import preserve_context as pc

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
log = logging.getLogger("timed_lookup")

INDEX = {"fruit": ["apple", "pear", "fig"], "veg": ["leek"]}


def timed(label, producer):
    # Wrap the producer so the clock starts when it runs, and pair it with an
    # after continuation that reports the elapsed time
    started = []

    def timed_producer():
        started.append(time.perf_counter())
        return producer()

    def report(values):
        elapsed_ms = (time.perf_counter() - started[0]) * 1000
        log.info("%s returned %d value(s) in %.3f ms", label, len(values), elapsed_ms)

    return timed_producer, report


# List context: the continuation sees every value, the caller gets them all
producer, report = timed("fruit lookup", lambda: INDEX["fruit"])
fruit = pc.call_list(producer, after=report)
print(fruit)

# Scalar context: the continuation mutates the single value in place
def shout(values):
    values[0] = values[0].upper()


print(pc.call_scalar(lambda: INDEX["veg"][0], after=shout))

# Void context: nothing comes back, but the continuation still runs
producer, report = timed("insert", lambda: INDEX.setdefault("nuts", []))
pc.call_void(producer, after=report)


# Decorated function: context fixed at decoration, overridable per call
@pc.preserved(replace=sorted, context="list")
def lookup(key):
    return INDEX.get(key)


print(lookup("fruit"))  # sorted list
print(lookup.call_scalar("veg"))  # sorted() of the one-element list
