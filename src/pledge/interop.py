"""Bridges between pledge Futures and asyncio.

The event loop stays an external collaborator: these helpers only copy an
outcome from one side to the other once it exists.

Example:
    >>> async def main():
    ...     promise = Promise()
    ...     waiter = to_asyncio(promise.future)
    ...     promise.succeed("done")
    ...     return await waiter
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from pledge.promise import Promise

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from pledge.future import Future

T = TypeVar("T")


def to_asyncio(future: Future[T], loop: asyncio.AbstractEventLoop | None = None) -> asyncio.Future[T]:
    """Return an asyncio future that mirrors future's outcome.

    The copy is scheduled with call_soon_threadsafe, so the pledge Future
    may be settled from any thread. Cancelling the asyncio side does not
    affect the pledge Future. A StopIteration failure arrives as a
    RuntimeError whose __cause__ is the original exception.

    Raises:
        RuntimeError: If no loop is given and none is running
    """
    loop = loop or asyncio.get_running_loop()
    mirror: asyncio.Future[T] = loop.create_future()

    def copy() -> None:
        if mirror.done():
            return
        if future.failed():
            mirror.set_exception(_awaitable_error(future.get_error()))  # type: ignore[arg-type]
        else:
            mirror.set_result(future.get_value())

    future.on_complete(lambda _: loop.call_soon_threadsafe(copy))
    return mirror


def from_asyncio(awaitable: Awaitable[T]) -> Future[T]:
    """Return a pledge Future settled when the asyncio future (or task) completes.

    Coroutines are wrapped in a task, which needs a running loop. A
    cancelled asyncio future fails the pledge Future with CancelledError.
    """
    source = asyncio.ensure_future(awaitable)
    promise: Promise[T] = Promise()

    def copy(done: asyncio.Future[T]) -> None:
        if done.cancelled():
            promise.fail(asyncio.CancelledError())
        elif (exc := done.exception()) is not None:
            promise.fail(exc)
        else:
            promise.succeed(done.result())

    source.add_done_callback(copy)
    return promise.future


def _awaitable_error(error: BaseException) -> BaseException:
    """asyncio refuses StopIteration on a future; wrap it the way coroutines do."""
    if isinstance(error, StopIteration):
        wrapped = RuntimeError("future failed with StopIteration")
        wrapped.__cause__ = error
        return wrapped
    return error
