"""Write side of the Promise/Future pair.

A Promise is the producer's single-use authority to settle one Future.
The producer keeps the Promise and hands the Future to consumers:

    >>> def fetch_later():
    ...     promise = Promise()
    ...     # ... start the operation; when it ends call one of
    ...     # promise.succeed(value) / promise.fail(error)
    ...     return promise.future

succeed(), fail() and resolve() are unguarded: calling one after the
Future has settled, or while the Promise is chained to another Future,
raises InvalidStateError (or is ignored with a warning when strict
settlement is disabled). resolve_safely() is the guarded variant for
producers racing each other, e.g. a timeout against the real result.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pledge.foundation.errors import ErrorCode, InvalidArgumentError
from pledge.future import Future, require_exception
from pledge.observability import get_logger

T = TypeVar("T")

_log = get_logger("pledge.promise")


class Promise(Generic[T]):
    """Single-use capability to settle exactly one Future.

    Example:
        >>> promise: Promise[int] = Promise()
        >>> promise.resolve_safely(None, 42)
        True
        >>> promise.resolve_safely(None, 99)
        False
        >>> promise.future.get_value()
        42
    """

    __slots__ = ("_future", "_settle", "_chained")

    def __init__(self) -> None:
        self._future, self._settle = Future._open()
        self._chained = False

    @property
    def future(self) -> Future[T]:
        return self._future

    def get_future(self) -> Future[T]:
        """Return the paired Future. Always the same instance."""
        return self._future

    def succeed(self, value: T | Future[T] | None = None) -> None:
        """Fulfil the Future with value.

        If value is itself a Future, settlement is deferred until it
        settles and its outcome (value or error) is passed through. Until
        then only resolve_safely() may still settle this Promise.

        Raises:
            InvalidArgumentError: If value is this Promise's own Future
            InvalidStateError: If the Future is settled or already chained
        """
        if not isinstance(value, Future):
            self._resolve("succeed", None, value)
            return
        if value is self._future:
            raise InvalidArgumentError.create(
                "succeed", "a promise cannot be chained to its own future", ErrorCode.CHAIN_CYCLE,
            )
        if self._future.is_complete():
            self._settle.refuse("succeed", "future is already settled")
            return
        if self._chained:
            self._settle.refuse("succeed", "promise is already chained to another future")
            return
        self._chained = True
        _log.debug("promise chained", inner=repr(value))
        value.on_complete(self._forward)

    def fail(self, error: BaseException) -> None:
        """Fail the Future with error.

        Raises:
            InvalidArgumentError: If error is None or not an exception
        """
        require_exception("fail", error)
        self._resolve("fail", error, None)

    def resolve(self, error: BaseException | None = None, value: T | None = None) -> None:
        """Settle from an (error, value) pair. A non-None error wins."""
        self._resolve("resolve", error, value)

    def resolve_safely(self, error: BaseException | None = None, value: T | None = None) -> bool:
        """Settle only if the Future is still pending.

        A pending chain does not block this call; it is how a competing
        producer (e.g. a timeout) overrides a chained result.

        Returns:
            True if this call settled the Future, False if it was already settled
        """
        if self._future.is_complete():
            _log.debug("resolve_safely skipped", state=self._future.state.value)
            return False
        if error is not None:
            require_exception("resolve_safely", error)
        self._settle(error, value, "resolve_safely")
        return True

    def _resolve(self, operation: str, error: BaseException | None, value: T | None) -> None:
        if error is not None:
            require_exception(operation, error)
        if self._chained and not self._future.is_complete():
            self._settle.refuse(operation, "promise is already chained to another future")
            return
        self._settle(error, value, operation)

    def _forward(self, inner: Future[T]) -> None:
        error, value = inner.outcome().to_tuple()
        if not self.resolve_safely(error, value):
            _log.debug("chained outcome dropped", inner=repr(inner), outer=repr(self._future))

    def __repr__(self) -> str:
        return f"<Promise future={self._future!r}>"
