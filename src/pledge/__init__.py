"""Pledge - a minimal Promise/Future pair for callback-driven code.

A producer creates a Promise, hands its Future to consumers, and settles
it exactly once later. Observers run synchronously when it settles, or
immediately if they register afterwards.

Quick Start:
    >>> from pledge import Promise
    >>>
    >>> def lookup(key: str):
    ...     promise = Promise()
    ...     # hand promise to whatever finishes the work, then:
    ...     promise.succeed(f"value for {key}")
    ...     return promise.future
    >>>
    >>> future = lookup("a")
    >>> future.on_complete(lambda f: print(f.get_value()))
    value for a

Chaining:
    >>> outer, inner = Promise(), Promise()
    >>> outer.succeed(inner.future)   # outer waits for inner
    >>> inner.fail(TimeoutError("slow backend"))
    >>> outer.future.get_error()
    TimeoutError('slow backend')

Racing producers:
    >>> promise = Promise()
    >>> promise.resolve_safely(None, "result")
    True
    >>> promise.resolve_safely(TimeoutError(), None)   # timeout lost the race
    False
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .future import Failure, Future, FutureState, Success
from .promise import Promise

# Combinators
from .combinators import all_of, any_of, settled

# Interop
from .interop import from_asyncio, to_asyncio

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    FutureError,
    FutureException,
    InvalidArgumentError,
    InvalidStateError,
    Ok,
    Result,
)

# Configuration
from .foundation.config import PledgeSettings, clear_settings_cache, get_settings

# Logging
from .observability import configure_logging, get_logger

__all__ = [
    "__version__",
    # Core
    "Future",
    "FutureState",
    "Promise",
    "Success",
    "Failure",
    # Combinators
    "all_of",
    "any_of",
    "settled",
    # Interop
    "from_asyncio",
    "to_asyncio",
    # Errors
    "ErrorCode",
    "FutureError",
    "FutureException",
    "InvalidArgumentError",
    "InvalidStateError",
    "Result",
    "Ok",
    "Err",
    # Configuration
    "PledgeSettings",
    "clear_settings_cache",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
]
