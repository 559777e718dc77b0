"""Tests for asyncio bridging."""

from __future__ import annotations

import asyncio
import threading

import pytest

from pledge import Failure, Promise, Success, from_asyncio, to_asyncio


@pytest.mark.asyncio
async def test_to_asyncio_mirrors_value() -> None:
    promise: Promise[str] = Promise()
    waiter = to_asyncio(promise.future)
    assert not waiter.done()

    promise.succeed("done")
    assert await waiter == "done"


@pytest.mark.asyncio
async def test_to_asyncio_mirrors_error() -> None:
    promise: Promise[str] = Promise()
    waiter = to_asyncio(promise.future)
    promise.fail(ConnectionError("reset"))

    with pytest.raises(ConnectionError):
        await waiter


@pytest.mark.asyncio
async def test_to_asyncio_on_settled_future() -> None:
    assert await to_asyncio(Success(5)) == 5


@pytest.mark.asyncio
async def test_to_asyncio_cancelled_waiter_leaves_future_alone() -> None:
    promise: Promise[int] = Promise()
    waiter = to_asyncio(promise.future)
    waiter.cancel()

    promise.succeed(1)
    await asyncio.sleep(0)
    assert waiter.cancelled()
    assert promise.future.get_value() == 1


@pytest.mark.asyncio
async def test_from_asyncio_value() -> None:
    async def compute() -> int:
        await asyncio.sleep(0)
        return 7

    future = from_asyncio(compute())
    assert not future.is_complete()

    calls: list[int] = []
    future.on_complete(lambda f: calls.append(f.get_value()))
    await asyncio.sleep(0.01)
    assert calls == [7]


@pytest.mark.asyncio
async def test_from_asyncio_error() -> None:
    loop = asyncio.get_running_loop()
    source: asyncio.Future[int] = loop.create_future()
    future = from_asyncio(source)

    source.set_exception(LookupError("gone"))
    await asyncio.sleep(0)
    assert isinstance(future.get_error(), LookupError)


@pytest.mark.asyncio
async def test_from_asyncio_cancelled() -> None:
    loop = asyncio.get_running_loop()
    source: asyncio.Future[int] = loop.create_future()
    future = from_asyncio(source)

    source.cancel()
    await asyncio.sleep(0)
    assert isinstance(future.get_error(), asyncio.CancelledError)


@pytest.mark.asyncio
async def test_to_asyncio_wraps_stop_iteration() -> None:
    error = StopIteration("exhausted")
    waiter = to_asyncio(Failure(error))

    with pytest.raises(RuntimeError) as info:
        await asyncio.wait_for(waiter, 1.0)
    assert info.value.__cause__ is error


@pytest.mark.asyncio
async def test_to_asyncio_settled_from_another_thread() -> None:
    promise: Promise[str] = Promise()
    waiter = to_asyncio(promise.future)

    worker = threading.Thread(target=promise.succeed, args=("from worker",))
    worker.start()
    assert await asyncio.wait_for(waiter, 1.0) == "from worker"
    worker.join()
