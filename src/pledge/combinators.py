"""Combine several Futures into one.

Each combinator returns a new Future backed by its own Promise. Inputs
settle it through resolve_safely(), so whichever input decides the result
first wins and later inputs are ignored. Dispatch stays synchronous: the
combined Future settles inside the callback of the input that decides it.

Example:
    >>> a, b = Promise(), Promise()
    >>> both = all_of([a.future, b.future])
    >>> a.succeed(1); b.succeed(2)
    >>> both.get_value()
    [1, 2]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pledge.foundation.errors import ErrorCode, InvalidArgumentError, Result, collect_results, sequence
from pledge.promise import Promise

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pledge.future import Future

T = TypeVar("T")


def all_of(futures: Iterable[Future[T]]) -> Future[list[T]]:
    """Succeed with every value in input order, or fail with the first failure.

    An empty input succeeds immediately with ``[]``.
    """
    inputs = list(futures)
    promise: Promise[list[T]] = Promise()
    remaining = len(inputs)
    if not remaining:
        promise.succeed([])
        return promise.future

    def on_settled(future: Future[T]) -> None:
        nonlocal remaining
        if future.failed():
            promise.resolve_safely(future.get_error(), None)
            return
        remaining -= 1
        if not remaining:
            promise.resolve_safely(None, sequence(f.outcome() for f in inputs).unwrap())

    for future in inputs:
        future.on_complete(on_settled)
    return promise.future


def any_of(futures: Iterable[Future[T]]) -> Future[T]:
    """Succeed with the first value to arrive.

    Fails only when every input fails, with an exception group holding
    each failure in input order.

    Raises:
        InvalidArgumentError: If no futures are given
    """
    inputs = list(futures)
    if not inputs:
        raise InvalidArgumentError.create("any_of", "at least one future is required", ErrorCode.EMPTY_INPUT)
    promise: Promise[T] = Promise()
    remaining = len(inputs)

    def on_settled(future: Future[T]) -> None:
        nonlocal remaining
        if future.succeeded():
            promise.resolve_safely(None, future.get_value())
            return
        remaining -= 1
        if not remaining:
            errors = collect_results(f.outcome() for f in inputs).unwrap_err()
            promise.resolve_safely(BaseExceptionGroup("all futures failed", errors), None)

    for future in inputs:
        future.on_complete(on_settled)
    return promise.future


def settled(futures: Iterable[Future[T]]) -> Future[list[Result[T, BaseException]]]:
    """Wait for every input and succeed with their outcomes in input order. Never fails."""
    inputs = list(futures)
    promise: Promise[list[Result[T, BaseException]]] = Promise()
    remaining = len(inputs)
    if not remaining:
        promise.succeed([])
        return promise.future

    def on_settled(_: Future[T]) -> None:
        nonlocal remaining
        remaining -= 1
        if not remaining:
            promise.resolve_safely(None, [f.outcome() for f in inputs])

    for future in inputs:
        future.on_complete(on_settled)
    return promise.future
